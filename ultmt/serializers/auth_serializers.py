from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    # username or email
    username = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)


class RefreshTokenSerializer(serializers.Serializer):
    refresh = serializers.CharField()
