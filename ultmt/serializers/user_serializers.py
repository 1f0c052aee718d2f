from rest_framework import serializers


class SignUpSerializer(serializers.Serializer):
    """
    Only checks that the fields are strings. Length, format and password rules
    are enforced by the user service so every caller gets the same errors.
    """

    firstName = serializers.CharField(allow_blank=True, default="")
    lastName = serializers.CharField(allow_blank=True, default="")
    email = serializers.CharField(allow_blank=True, default="")
    username = serializers.CharField(allow_blank=True, default="")
    password = serializers.CharField(allow_blank=True, default="", trim_whitespace=False)


class ChangePasswordSerializer(serializers.Serializer):
    currentPassword = serializers.CharField(trim_whitespace=False)
    newPassword = serializers.CharField(trim_whitespace=False)


class ChangeEmailSerializer(serializers.Serializer):
    currentPassword = serializers.CharField(trim_whitespace=False)
    newEmail = serializers.CharField()


class ChangeNameSerializer(serializers.Serializer):
    firstName = serializers.CharField(required=False, allow_blank=True)
    lastName = serializers.CharField(required=False, allow_blank=True)


class PasswordRecoverySerializer(serializers.Serializer):
    email = serializers.CharField()


class PasswordResetSerializer(serializers.Serializer):
    passcode = serializers.CharField()
    newPassword = serializers.CharField(trim_whitespace=False)


class UserSearchQuerySerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True, default="")
    open = serializers.BooleanField(required=False, allow_null=True, default=None)
