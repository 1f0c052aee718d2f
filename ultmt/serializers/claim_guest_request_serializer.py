from rest_framework import serializers


class CreateClaimGuestRequestSerializer(serializers.Serializer):
    guestId = serializers.CharField()
    teamId = serializers.CharField()
