from rest_framework import serializers


class CreateTeamDesignationSerializer(serializers.Serializer):
    description = serializers.CharField()
    abbreviation = serializers.CharField(max_length=3)
