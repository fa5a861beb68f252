from django.conf import settings
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from .models import AccountStatus, AdminRole


class CompanySerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    status = serializers.ChoiceField(choices=AccountStatus.choices, read_only=True)


class AdminSerializer(serializers.Serializer):
    """
    Output record for an admin account.

    Never carries the password hash. ``company`` is the owning company's
    name, looked up in the store passed through the serializer context.
    """
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)
    phone = serializers.CharField(read_only=True)
    company_id = serializers.CharField(read_only=True)
    company = serializers.SerializerMethodField()
    role = serializers.ChoiceField(choices=AdminRole.choices, read_only=True)
    status = serializers.ChoiceField(choices=AccountStatus.choices, read_only=True)

    def get_company(self, admin) -> str:
        if admin.is_super_admin:
            return settings.GLOBAL_COMPANY_NAME
        store = self.context.get("store")
        company = store.companies.get(admin.company_id) if store is not None else None
        return company.name if company else "N/A"


def _check_password(value: str) -> str:
    try:
        validate_password(value)
    except DjangoValidationError as exc:
        raise serializers.ValidationError(list(exc.messages))
    return value


class RegistrationSerializer(serializers.Serializer):
    """Self-registration of a tenant admin (creates the company if needed)."""
    name = serializers.CharField(max_length=150)
    company = serializers.CharField(max_length=200)
    phone = serializers.CharField(max_length=40)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_company(self, value: str):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Company name is required.")
        return value

    def validate_password(self, value: str):
        return _check_password(value)


class AdminCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=40)
    company_id = serializers.CharField(required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=AdminRole.choices, default=AdminRole.ADMIN)
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_password(self, value: str):
        return _check_password(value)

    def validate(self, attrs):
        if attrs["role"] == AdminRole.SUPER_ADMIN:
            attrs["company_id"] = settings.GLOBAL_COMPANY_ID
        elif not attrs.get("company_id"):
            raise serializers.ValidationError({"company_id": ["This field is required."]})
        return attrs


class AdminUpdateSerializer(serializers.Serializer):
    """
    Partial update of an admin account.

    A blank password means "keep the current password".
    """
    name = serializers.CharField(max_length=150, required=False)
    email = serializers.EmailField(required=False)
    phone = serializers.CharField(max_length=40, required=False)
    company_id = serializers.CharField(required=False)
    role = serializers.ChoiceField(choices=AdminRole.choices, required=False)
    status = serializers.ChoiceField(choices=AccountStatus.choices, required=False)
    password = serializers.CharField(
        write_only=True, required=False, allow_blank=True, trim_whitespace=False,
    )

    def validate_password(self, value: str):
        if not value:
            return value
        return _check_password(value)


class CompanyInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    status = serializers.ChoiceField(choices=AccountStatus.choices, required=False)

    def validate_name(self, value: str):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Company name is required.")
        return value
