"""Seed demo users and co-authored articles."""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from articles.models import Article
from authentication.managers import UserManager

DEMO_USERS = [
    ("alice@example.com", "alice", "alicepass"),
    ("bob@example.com", "bob", "bobpass12"),
    ("carol@example.com", "carol", "carolpass"),
]

DEMO_ARTICLES = [
    ("alice", "Locking for editors", "How edit locks keep drafts consistent.", ["locks", "editing"]),
    ("alice", "Writing with co-authors", "Sharing an article with other writers.", ["coauthors"]),
    ("bob", "A quiet article", "Nobody else edits this one.", []),
]


def create_demo_users() -> dict:
    """Create the demo accounts if missing and return a username->User map."""
    User = get_user_model()
    users = {}
    for email, username, password in DEMO_USERS:
        user, _ = User.objects.get_or_create(
            email=email,
            defaults={"username": username, "password_hash": UserManager.hash_password(password)},
        )
        users[username] = user
    return users


def create_demo_articles(users: dict) -> list[Article]:
    """Create demo articles; alice's first article is co-authored by bob."""
    articles = []
    for author, title, body, tags in DEMO_ARTICLES:
        article, created = Article.objects.get_or_create(
            title=title,
            author=users[author],
            defaults={"description": body, "body": body, "tag_list": tags},
        )
        if created and article.title == DEMO_ARTICLES[0][1]:
            article.co_authors.add(users["bob"])
        articles.append(article)
    return articles


class Command(BaseCommand):
    help = "Seed demo users and articles. Use --reset to clear them first."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete the demo users (and, by cascade, their articles and locks) before seeding.",
        )

    def handle(self, *args, **options):
        if options.get("reset"):
            get_user_model().objects.filter(email__in=[email for email, _, _ in DEMO_USERS]).delete()
            self.stdout.write(self.style.WARNING("Demo data cleared."))

        self.stdout.write("Seeding demo data...")
        users = create_demo_users()
        articles = create_demo_articles(users)
        self.stdout.write(self.style.SUCCESS(f"Seeded {len(users)} users and {len(articles)} articles."))
