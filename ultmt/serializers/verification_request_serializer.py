from rest_framework import serializers


class CreateVerificationRequestSerializer(serializers.Serializer):
    sourceType = serializers.CharField()
    sourceId = serializers.CharField()


class VerificationResponseQuerySerializer(serializers.Serializer):
    response = serializers.CharField()
