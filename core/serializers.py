from django.contrib.auth import get_user_model, password_validation
from django.db import transaction
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from core.models import AuditLog, Company

User = get_user_model()

COMPANY_PROFILE_FIELDS = ["contact_name", "email", "phone", "address_type", "country", "state", "city", "address"]


def _company_name_taken(name, company_type, exclude_id=None):
    queryset = Company.objects.filter(name__iexact=name.strip(), type=company_type)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    return queryset.exists()


class CompanySerializer(serializers.ModelSerializer):
    class Meta:
        model = Company
        fields = ["id", "name", "type", *COMPANY_PROFILE_FIELDS, "created_at", "updated_at"]
        read_only_fields = ["id", "type", "created_at", "updated_at"]

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Company name is required.")
        if self.instance and _company_name_taken(value, self.instance.type, exclude_id=self.instance.id):
            raise serializers.ValidationError("A company with this name is already registered.")
        return value


class UserSerializer(serializers.ModelSerializer):
    company = CompanySerializer(read_only=True)

    class Meta:
        model = User
        fields = ["id", "username", "email", "first_name", "last_name", "company"]
        read_only_fields = fields


class UserRegistrationSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True)
    company_name = serializers.CharField(write_only=True, max_length=255)
    company_type = serializers.ChoiceField(choices=Company.Type.choices, write_only=True)
    company_contact_name = serializers.CharField(write_only=True, required=False, allow_blank=True)
    company_phone = serializers.CharField(write_only=True, required=False, allow_blank=True)
    company_country = serializers.CharField(write_only=True, required=False, allow_blank=True)
    company_state = serializers.CharField(write_only=True, required=False, allow_blank=True)
    company_city = serializers.CharField(write_only=True, required=False, allow_blank=True)
    company_address = serializers.CharField(write_only=True, required=False, allow_blank=True)
    company = CompanySerializer(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "password",
            "first_name",
            "last_name",
            "company_name",
            "company_type",
            "company_contact_name",
            "company_phone",
            "company_country",
            "company_state",
            "company_city",
            "company_address",
            "company",
        ]
        read_only_fields = ["id", "company"]

    def validate_email(self, value):
        normalized_email = value.strip().lower()
        if normalized_email and User.objects.filter(email__iexact=normalized_email).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return normalized_email

    def validate_password(self, value):
        password_validation.validate_password(value)
        return value

    def validate(self, attrs):
        company_name = attrs["company_name"].strip()
        if not company_name:
            raise serializers.ValidationError({"company_name": ["Company name is required."]})
        if _company_name_taken(company_name, attrs["company_type"]):
            raise serializers.ValidationError({"company_name": ["A company with this name is already registered."]})
        attrs["company_name"] = company_name
        return attrs

    @transaction.atomic
    def create(self, validated_data):
        company = Company.objects.create(
            name=validated_data["company_name"],
            type=validated_data["company_type"],
            contact_name=validated_data.get("company_contact_name", ""),
            email=validated_data.get("email", ""),
            phone=validated_data.get("company_phone", ""),
            country=validated_data.get("company_country", ""),
            state=validated_data.get("company_state", ""),
            city=validated_data.get("company_city", ""),
            address=validated_data.get("company_address", ""),
        )
        user = User.objects.create_user(
            username=validated_data["username"],
            email=validated_data.get("email", ""),
            password=validated_data["password"],
            first_name=validated_data.get("first_name", ""),
            last_name=validated_data.get("last_name", ""),
            company=company,
        )
        return user


class EmailOrUsernameTokenObtainPairSerializer(TokenObtainPairSerializer):
    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        company = getattr(user, "company", None)
        token["company_id"] = str(company.id) if company else None
        token["company_type"] = company.type if company else None
        token["company_name"] = company.name if company else None
        return token

    def validate(self, attrs):
        username = attrs.get("username", "")
        if username and "@" in username:
            try:
                user = User.objects.get(email__iexact=username)
                attrs["username"] = user.get_username()
            except User.DoesNotExist:
                pass
        return super().validate(attrs)


class AuditLogSerializer(serializers.ModelSerializer):
    actor_username = serializers.CharField(source="actor.username", read_only=True)

    class Meta:
        model = AuditLog
        fields = [
            "id",
            "actor",
            "actor_username",
            "company",
            "action",
            "entity",
            "entity_id",
            "before_snapshot",
            "after_snapshot",
            "request_id",
            "created_at",
        ]
        read_only_fields = fields
