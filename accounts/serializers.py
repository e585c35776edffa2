from django.contrib.auth import get_user_model
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for user details.
    """
    display_name = serializers.CharField(source='get_full_name', read_only=True)
    role_display = serializers.CharField(source='get_role_display', read_only=True)

    class Meta:
        model = User
        fields = (
            'id', 'username', 'email', 'full_name', 'display_name',
            'role', 'role_display', 'is_active', 'date_joined'
        )
        read_only_fields = ('id', 'role', 'role_display', 'is_active', 'date_joined')


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    JWT token serializer that includes the user's role, so the client can
    route workers and admins to the right screens.
    """
    def validate(self, attrs):
        data = super().validate(attrs)

        data['user'] = {
            'id': str(self.user.id),
            'username': self.user.username,
            'email': self.user.email,
            'role': self.user.role,
            'full_name': self.user.get_full_name(),
        }
        return data
