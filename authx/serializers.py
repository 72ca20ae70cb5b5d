from django.contrib.auth import authenticate, get_user_model
from rest_framework import serializers

from users.serializers import PROFILE_FIELDS

User = get_user_model()

# Required on the youth registration form
REQUIRED_PROFILE_FIELDS = (
    'first_name',
    'last_name',
    'sex',
    'birthday',
    'purok',
    'contact_number',
    'civil_status',
    'educational_background',
    'youth_classification',
    'work_status',
)


class SignupSerializer(serializers.ModelSerializer):
    """
    Citizen self-registration. The profile starts as Pending and gets an
    SK ID only once an admin approves it.
    """
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)

    class Meta:
        model = User
        fields = ['email', 'password', *PROFILE_FIELDS]
        extra_kwargs = {name: {'required': True, 'allow_blank': False} for name in REQUIRED_PROFILE_FIELDS}
        extra_kwargs['birthday'] = {'required': True, 'allow_null': False}

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already registered.")
        return value.lower()

    def create(self, validated_data):
        password = validated_data.pop('password')
        email = validated_data.pop('email')
        user = User.objects.create_user(
            username=email,
            email=email,
            password=password,
            role=User.ROLE_YOUTH,
            status=User.STATUS_PENDING,
            **validated_data,
        )
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        email = attrs.get("email")
        password = attrs.get("password")

        try:
            user = User.objects.get(email__iexact=email)
        except User.DoesNotExist:
            raise serializers.ValidationError("Invalid credentials")

        user = authenticate(
            username=user.username,  # Django still authenticates by username
            password=password
        )

        if not user:
            raise serializers.ValidationError("Invalid credentials")

        if user.role == User.ROLE_YOUTH and user.status in (User.STATUS_REJECTED, User.STATUS_ARCHIVED):
            raise serializers.ValidationError(f"Account is {user.status.lower()}.")

        attrs["user"] = user
        return attrs
