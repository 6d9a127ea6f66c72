"""
Account models - organizations, platform users and participant profiles
"""
from django.contrib.auth.hashers import check_password, make_password
from django.db import models
from django.utils import timezone
import uuid


ROLE_TYPE_CHOICES = [
    ('JUNIOR_INSPECTOR', 'Junior Inspector'),
    ('INSPECTOR', 'Inspector'),
    ('SENIOR_INSPECTOR', 'Senior Inspector'),
    ('UNIT_MANAGER', 'Unit Manager'),
    ('ANALYST', 'Analyst'),
    ('DIRECTOR', 'Director'),
    ('OTHER', 'Other'),
]

DEFAULT_ROLE_TYPE = 'INSPECTOR'


class Organization(models.Model):
    """Client organization (regulator, manufacturer, partner...)"""
    TYPE_CHOICES = [
        ('NRA', 'National Regulatory Authority'),
        ('MANUFACTURER', 'Manufacturer'),
        ('ACADEMIC', 'Academic'),
        ('DEVELOPMENT_PARTNER', 'Development Partner'),
        ('OTHER', 'Other'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='organization_id')
    name = models.CharField(max_length=255, db_column='name')
    type = models.CharField(max_length=30, choices=TYPE_CHOICES, db_column='type')
    country = models.CharField(max_length=100, blank=True, default='', db_column='country')
    settings = models.JSONField(default=dict, blank=True, db_column='settings')
    created_at = models.DateTimeField(default=timezone.now, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    class Meta:
        db_table = 'organizations'
        ordering = ['name']

    def __str__(self):
        return self.name


class UserProfile(models.Model):
    """Platform user - authenticates with email + password and a bearer token"""
    ROLE_PARTICIPANT = 'PARTICIPANT'
    ROLE_FACILITATOR = 'FACILITATOR'
    ROLE_CLIENT_ADMIN = 'CLIENT_ADMIN'
    ROLE_SYSTEM_ADMIN = 'SYSTEM_ADMIN'

    ROLE_CHOICES = [
        (ROLE_PARTICIPANT, 'Participant'),
        (ROLE_FACILITATOR, 'Facilitator'),
        (ROLE_CLIENT_ADMIN, 'Client Admin'),
        (ROLE_SYSTEM_ADMIN, 'System Admin'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='user_id')
    email = models.EmailField(unique=True, db_column='email')
    password_hash = models.CharField(max_length=255, db_column='password_hash')
    first_name = models.CharField(max_length=100, db_column='first_name')
    last_name = models.CharField(max_length=100, db_column='last_name')
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_PARTICIPANT, db_column='role')
    organization = models.ForeignKey(
        Organization, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='users', db_column='organization_id'
    )
    is_active = models.BooleanField(default=True, db_column='is_active')
    profile = models.JSONField(default=dict, blank=True, db_column='profile')
    last_login = models.DateTimeField(blank=True, null=True, db_column='last_login')
    created_at = models.DateTimeField(default=timezone.now, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    class Meta:
        db_table = 'users'
        ordering = ['last_name', 'first_name']

    def __str__(self):
        return self.full_name or self.email

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    # DRF permission classes only look at these two flags
    @property
    def is_authenticated(self):
        return True

    @property
    def is_anonymous(self):
        return False

    @property
    def sees_all_organizations(self):
        """System admins and facilitators work across every organization."""
        return self.role in (self.ROLE_SYSTEM_ADMIN, self.ROLE_FACILITATOR)

    def set_password(self, raw_password):
        self.password_hash = make_password(raw_password)

    def check_password(self, raw_password):
        return check_password(raw_password, self.password_hash)


class ParticipantProfile(models.Model):
    """Professional background of a participant; drives the role benchmark"""
    EDUCATION_CHOICES = [
        ('HIGH_SCHOOL', 'High School'),
        ('DIPLOMA', 'Diploma'),
        ('BACHELORS', 'Bachelors'),
        ('MASTERS', 'Masters'),
        ('DOCTORATE', 'Doctorate'),
        ('OTHER', 'Other'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='participant_profile_id')
    user = models.OneToOneField(
        UserProfile, on_delete=models.CASCADE, related_name='participant_profile', db_column='user_id'
    )
    job_title = models.CharField(max_length=255, blank=True, null=True, db_column='job_title')
    years_experience = models.PositiveIntegerField(blank=True, null=True, db_column='years_experience')
    education_level = models.CharField(
        max_length=20, choices=EDUCATION_CHOICES, blank=True, null=True, db_column='education_level'
    )
    current_role_type = models.CharField(
        max_length=20, choices=ROLE_TYPE_CHOICES, blank=True, null=True, db_column='current_role_type'
    )
    professional_background = models.TextField(blank=True, null=True, db_column='professional_background')
    created_at = models.DateTimeField(default=timezone.now, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    class Meta:
        db_table = 'participant_profiles'

    def __str__(self):
        return f"Profile of {self.user}"
