from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ultmt.constants.messages import AppMessages
from ultmt.models.one_time_passcode import OneTimePasscodeModel
from ultmt.serializers.one_time_passcode_serializer import OTPReasonQuerySerializer
from ultmt.services.one_time_passcode_service import OneTimePasscodeService


class OneTimePasscodeView(APIView):
    @extend_schema(
        operation_id="create_otp",
        summary="Issue a one time passcode",
        tags=["otp"],
        parameters=[OpenApiParameter(name="reason", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY)],
        responses={201: OpenApiResponse(response=OneTimePasscodeModel)},
    )
    def post(self, request: Request):
        query = OTPReasonQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        otp = OneTimePasscodeService.create_otp(request.user_id, query.validated_data["reason"])
        return Response(data=otp.model_dump(mode="json", by_alias=True), status=status.HTTP_201_CREATED)


class ExpiredPasscodesView(APIView):
    @extend_schema(
        operation_id="delete_expired_passcodes",
        summary="Sweep passcodes that expired more than an hour ago",
        tags=["otp"],
        responses={200: OpenApiResponse(description="Number of passcodes deleted")},
    )
    def delete(self, request: Request):
        deleted = OneTimePasscodeService.delete_expired_passcodes()
        return Response(data={"message": AppMessages.PASSCODES_DELETED, "deleted": deleted}, status=status.HTTP_200_OK)
