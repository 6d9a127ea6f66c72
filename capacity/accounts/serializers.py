"""
Account serializers - users, participant profiles, organizations and auth payloads
"""
from rest_framework import serializers

from .models import Organization, ParticipantProfile, UserProfile


class OrganizationSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Organization
        fields = ['id', 'name', 'type', 'country']


class ParticipantProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = ParticipantProfile
        fields = [
            'id', 'job_title', 'years_experience', 'education_level',
            'current_role_type', 'professional_background', 'updated_at',
        ]
        read_only_fields = ['id', 'updated_at']


class UserSerializer(serializers.ModelSerializer):
    """Full user representation returned by auth and user endpoints"""
    organization = OrganizationSummarySerializer(read_only=True)
    participant_profile = serializers.SerializerMethodField()
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = UserProfile
        fields = [
            'id', 'email', 'first_name', 'last_name', 'full_name', 'role',
            'organization', 'participant_profile', 'is_active', 'profile',
            'last_login', 'created_at',
        ]
        read_only_fields = fields

    def get_participant_profile(self, obj):
        try:
            profile = obj.participant_profile
        except ParticipantProfile.DoesNotExist:
            return None
        return ParticipantProfileSerializer(profile).data


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = UserProfile
        fields = ['id', 'email', 'first_name', 'last_name', 'role']


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True,
                                     error_messages={'min_length': 'Password must be at least 8 characters'})
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    role = serializers.ChoiceField(choices=UserProfile.ROLE_CHOICES, required=False)
    organization_id = serializers.UUIDField(required=False, allow_null=True)

    def validate_email(self, value):
        return value.strip().lower()

    def validate_organization_id(self, value):
        if value is not None and not Organization.objects.filter(id=value).exists():
            raise serializers.ValidationError('Organization not found')
        return value


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate_email(self, value):
        return value.strip().lower()


class UserUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserProfile
        fields = ['first_name', 'last_name', 'profile']
        extra_kwargs = {
            'first_name': {'required': False},
            'last_name': {'required': False},
            'profile': {'required': False},
        }


class OrganizationSerializer(serializers.ModelSerializer):
    user_count = serializers.SerializerMethodField()
    project_count = serializers.SerializerMethodField()

    class Meta:
        model = Organization
        fields = ['id', 'name', 'type', 'country', 'settings', 'user_count', 'project_count',
                  'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']

    # list views annotate the counts, detail views fall back to a query
    def get_user_count(self, obj):
        count = getattr(obj, 'user_count', None)
        return obj.users.count() if count is None else count

    def get_project_count(self, obj):
        count = getattr(obj, 'project_count', None)
        return obj.projects.count() if count is None else count


class OrganizationDetailSerializer(OrganizationSerializer):
    users = UserSummarySerializer(many=True, read_only=True)
    projects = serializers.SerializerMethodField()

    class Meta(OrganizationSerializer.Meta):
        fields = OrganizationSerializer.Meta.fields + ['users', 'projects']

    def get_projects(self, obj):
        return [
            {'id': str(p.id), 'name': p.name, 'status': p.status,
             'start_date': p.start_date, 'end_date': p.end_date}
            for p in obj.projects.all()
        ]
