from django.core.management.base import BaseCommand

from ultmt.services.one_time_passcode_service import OneTimePasscodeService


class Command(BaseCommand):
    help = "Delete one time passcodes that expired more than an hour ago"

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS("Deleting expired passcodes..."))

        deleted = OneTimePasscodeService.delete_expired_passcodes()

        self.stdout.write(self.style.SUCCESS(f"Deleted {deleted} expired passcodes"))
