from rest_framework import serializers
from .models import User


PROFILE_FIELDS = [
    'first_name',
    'middle_name',
    'last_name',
    'suffix',
    'sex',
    'birthday',
    'profile_picture',
    'block',
    'lot',
    'house_number',
    'street',
    'purok',
    'contact_number',
    'civil_status',
    'educational_background',
    'youth_classification',
    'work_status',
    'registered_sk_voter',
    'registered_national_voter',
    'is_pwd',
    'is_cicwl',
    'is_indigenous',
]

# Set by approval / attendance flows only
REGISTRY_FIELDS = [
    'status',
    'sk_id_number',
    'qr_code',
    'id_printed',
    'id_printed_at',
    'points',
]


class UserSerializer(serializers.ModelSerializer):
    display_name = serializers.CharField(read_only=True)
    age = serializers.IntegerField(read_only=True)
    youth_age_group = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'role',
            'display_name',
            'age',
            'youth_age_group',
            'date_joined',
            *PROFILE_FIELDS,
            *REGISTRY_FIELDS,
        ]
        read_only_fields = ['id', 'username', 'role', 'date_joined', *REGISTRY_FIELDS]


class UpdateProfileSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, required=False)

    class Meta:
        model = User
        fields = [*PROFILE_FIELDS, 'email', 'password']

    def validate_email(self, value):
        qs = User.objects.filter(email__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Email is already in use.")
        return value

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if password:
            instance.set_password(password)
        instance.save()
        return instance


class PersonSummarySerializer(serializers.ModelSerializer):
    """Compact person row used inside event member lists."""
    name = serializers.CharField(source='display_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'sk_id_number', 'purok', 'points']
