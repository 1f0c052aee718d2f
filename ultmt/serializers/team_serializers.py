from rest_framework import serializers


class CreateTeamSerializer(serializers.Serializer):
    place = serializers.CharField(allow_blank=True, default="")
    name = serializers.CharField(allow_blank=True, default="")
    teamname = serializers.CharField(allow_blank=True, default="")
    seasonStart = serializers.DateTimeField()
    seasonEnd = serializers.DateTimeField()
    rosterOpen = serializers.BooleanField(required=False, default=False)


class RolloverSerializer(serializers.Serializer):
    copyPlayers = serializers.BooleanField(required=False, default=False)
    seasonStart = serializers.DateTimeField()
    seasonEnd = serializers.DateTimeField()


class CreateGuestSerializer(serializers.Serializer):
    firstName = serializers.CharField(allow_blank=True, default="")
    lastName = serializers.CharField(allow_blank=True, default="")


class ChangeDesignationSerializer(serializers.Serializer):
    designation = serializers.CharField()


class TeamSearchQuerySerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True, default="")
    rosterOpen = serializers.BooleanField(required=False, allow_null=True, default=None)
