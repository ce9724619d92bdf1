# dental_core/iam/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from dental_core.common.api.views import StateViewSet
from dental_core.iam.api.serializers import LoginRequestSerializer, UserWriteSerializer
from dental_core.iam.auth import DemoAuthService
from dental_core.iam.entities import UserPatch
from dental_core.iam.selectors import get_user, list_dentists, list_users
from dental_core.iam.serializers import SessionUserSerializer, UserSerializer
from dental_core.iam.services import UserService


class LoginView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(request=LoginRequestSerializer, responses={200: SessionUserSerializer}, tags=["IAM"])
    def post(self, request):
        ser = LoginRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        user = DemoAuthService().login(**ser.validated_data)
        return Response(SessionUserSerializer(user).data, status=status.HTTP_200_OK)


class LogoutView(APIView):
    @extend_schema(request=None, responses={204: None}, tags=["IAM"])
    def post(self, request):
        DemoAuthService().logout()
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeView(APIView):
    @extend_schema(responses={200: SessionUserSerializer}, tags=["IAM"])
    def get(self, request):
        return Response(SessionUserSerializer(request.user).data)


@extend_schema(tags=["Team"])
class UserViewSet(StateViewSet):
    serializer_class = UserSerializer
    not_found_message = "User not found."

    def list(self, request):
        users = list_users(
            self.state,
            role=request.query_params.get("role"),
            q=request.query_params.get("q"),
        )
        return self.paginated_response(users, UserSerializer)

    def retrieve(self, request, pk=None):
        return Response(UserSerializer(self.get_or_404(get_user, pk)).data)

    @extend_schema(request=UserWriteSerializer, responses={201: UserSerializer})
    def create(self, request):
        ser = UserWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user = UserService.create_user(self.state, **ser.validated_data)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=UserWriteSerializer, responses={200: UserSerializer})
    def partial_update(self, request, pk=None):
        ser = UserWriteSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        user = UserService.update_user(self.state, user_id=pk, patch=UserPatch.from_data(ser.validated_data))
        return Response(UserSerializer(user).data)

    def destroy(self, request, pk=None):
        UserService.delete_user(self.state, user_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: UserSerializer(many=True)})
    @action(detail=False, methods=["get"], url_path="dentists")
    def dentists(self, request):
        return Response(UserSerializer(list_dentists(self.state), many=True).data)
