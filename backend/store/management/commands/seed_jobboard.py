"""
Build a demo job board store and print what a visitor and the super admin see.

Usage:
    django-admin seed_jobboard --settings=jobboard_backend.settings
    django-admin seed_jobboard --block comp1

The store lives only for the duration of the command; this is a smoke
check of the tenant rules, not a loader for persistent data.
"""
from django.core.management.base import BaseCommand, CommandError

from access.facade import JobBoardAPI
from accounts.models import AccountStatus
from store.seed import DEMO_SUPER_ADMIN, build_store


class Command(BaseCommand):
    help = "Seed an in-memory job board store and print a summary"

    def add_arguments(self, parser):
        parser.add_argument(
            "--block",
            metavar="COMPANY_ID",
            help="Block this company (as the demo super admin) before printing",
        )

    def handle(self, *args, **options):
        api = JobBoardAPI(build_store(seed=True))
        actor = api.resolve_actor(DEMO_SUPER_ADMIN["id"])

        company_id = options.get("block")
        if company_id:
            result = api.update_company(actor, company_id, {"status": AccountStatus.BLOCKED})
            if not result.success:
                raise CommandError(result.error)
            self.stdout.write(self.style.WARNING(f"Blocked company {company_id}\n"))

        self.stdout.write("Companies:")
        for company in api.list_companies(actor).data["companies"]:
            self.stdout.write(f"  {company['id']:<8} {company['name']:<24} {company['status']}")

        self.stdout.write("Admins:")
        for admin in api.list_admins(actor).data["admins"]:
            self.stdout.write(
                f"  {admin['id']:<8} {admin['email']:<28} {admin['company']:<24} {admin['status']}"
            )

        self.stdout.write("Vacancies:")
        for vacancy in api.list_vacancies(actor).data["vacancies"]:
            self.stdout.write(
                f"  {vacancy['id']:<8} {vacancy['title']:<40} {vacancy['status']:<9} "
                f"{vacancy['candidate_count']} applicant(s)"
            )

        public = api.list_public_vacancies().data["vacancies"]
        self.stdout.write(
            self.style.SUCCESS(f"\n{len(public)} vacancy(ies) visible to the public")
        )
