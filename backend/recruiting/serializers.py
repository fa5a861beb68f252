from rest_framework import serializers

from .models import EmploymentType, VacancyStatus


class RequirementsField(serializers.ListField):
    """
    Ordered list of requirement strings.

    Also accepts a single newline-separated string (one requirement per
    line); blank lines are dropped.
    """
    child = serializers.CharField()

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = [line.strip() for line in data.splitlines()]
        if isinstance(data, (list, tuple)):
            data = [item for item in data if not (isinstance(item, str) and not item.strip())]
        return tuple(super().to_internal_value(data))


class VacancySerializer(serializers.Serializer):
    """
    Output record for a vacancy.

    ``candidate_count`` is included when the context carries
    ``include_counts=True`` (admin dashboards).
    """
    id = serializers.CharField(read_only=True)
    title = serializers.CharField(read_only=True)
    category = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    requirements = serializers.ListField(child=serializers.CharField(), read_only=True)
    location = serializers.CharField(read_only=True)
    type = serializers.ChoiceField(choices=EmploymentType.choices, read_only=True)
    status = serializers.ChoiceField(choices=VacancyStatus.choices, read_only=True)
    company_id = serializers.CharField(read_only=True)
    company = serializers.SerializerMethodField()

    def get_company(self, vacancy) -> str:
        store = self.context.get("store")
        company = store.companies.get(vacancy.company_id) if store is not None else None
        return company.name if company else ""

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if self.context.get("include_counts"):
            store = self.context["store"]
            data["candidate_count"] = store.candidates.count(job_id=instance.id)
        return data


class VacancyInputSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    category = serializers.CharField(max_length=100)
    description = serializers.CharField()
    requirements = RequirementsField(required=False, default=tuple)
    location = serializers.CharField(max_length=200)
    type = serializers.ChoiceField(choices=EmploymentType.choices, default=EmploymentType.FULL_TIME)
    status = serializers.ChoiceField(choices=VacancyStatus.choices, default=VacancyStatus.ACTIVE)
    company_id = serializers.CharField(required=False, allow_blank=True)


class CandidateSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    job_id = serializers.CharField(read_only=True)
    full_name = serializers.CharField(read_only=True)
    professional_title = serializers.CharField(read_only=True)
    years_of_experience = serializers.IntegerField(read_only=True)
    location = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)
    phone = serializers.CharField(read_only=True)
    cv_file_name = serializers.CharField(read_only=True)
    cv_file_reference = serializers.CharField(read_only=True)
    cv_content_type = serializers.CharField(read_only=True)
    application_date = serializers.DateTimeField(read_only=True)


class ApplicationSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=200)
    professional_title = serializers.CharField(max_length=200)
    years_of_experience = serializers.IntegerField(min_value=0, max_value=80)
    location = serializers.CharField(max_length=200)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=40)
