from rest_framework import serializers

from ultmt.constants.roster import OTPReason


class OTPReasonQuerySerializer(serializers.Serializer):
    reason = serializers.ChoiceField(choices=[reason.value for reason in OTPReason])
