from rest_framework import serializers


class AcceptQuerySerializer(serializers.Serializer):
    accept = serializers.BooleanField()


class OpenQuerySerializer(serializers.Serializer):
    open = serializers.BooleanField()


class PrivateQuerySerializer(serializers.Serializer):
    private = serializers.BooleanField()


class CodeQuerySerializer(serializers.Serializer):
    code = serializers.CharField()


class ManagerQuerySerializer(serializers.Serializer):
    manager = serializers.CharField()
