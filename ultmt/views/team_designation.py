from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ultmt.models.team_designation import TeamDesignationModel
from ultmt.serializers.team_designation_serializer import CreateTeamDesignationSerializer
from ultmt.services.team_designation_service import TeamDesignationService


class TeamDesignationListView(APIView):
    @extend_schema(
        operation_id="get_team_designations",
        summary="List team designations",
        tags=["team-designations"],
        responses={200: OpenApiResponse(response=TeamDesignationModel)},
    )
    def get(self, request: Request):
        designations = TeamDesignationService.get_designations()
        return Response(
            data=[designation.model_dump(mode="json", by_alias=True) for designation in designations],
            status=status.HTTP_200_OK,
        )


class TeamDesignationCreateView(APIView):
    @extend_schema(
        operation_id="create_team_designation",
        summary="Create or update a designation",
        description="Admins only. A designation with the same description gets the new abbreviation.",
        tags=["team-designations"],
        request=CreateTeamDesignationSerializer,
        responses={
            201: OpenApiResponse(response=TeamDesignationModel),
            401: OpenApiResponse(description="Not an admin"),
        },
    )
    def post(self, request: Request):
        serializer = CreateTeamDesignationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        designation = TeamDesignationService.create_team_designation(
            request.user_id, serializer.validated_data["description"], serializer.validated_data["abbreviation"]
        )
        return Response(data=designation.model_dump(mode="json", by_alias=True), status=status.HTTP_201_CREATED)
