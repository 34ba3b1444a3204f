"""Delete edit locks whose expiration has passed."""

from django.core.management.base import BaseCommand

from articles.locks import ArticleLockService


class Command(BaseCommand):
    help = "Remove expired article edit locks so no stale rows linger."

    def handle(self, *args, **options):
        purged = ArticleLockService.purge_expired()
        self.stdout.write(self.style.SUCCESS(f"Purged {purged} expired lock(s)."))
