import json
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from accounts.models import User
from scheduler.api.serializers import CardInSerializer
from scheduler.services.cards import create_cards, create_collection

SAMPLE_CARDS = [
    {"front": "¿Capital de Francia?", "back": "París"},
    {"front": "H2O", "back": "Agua"},
    {"front": "¿Cuántos minutos tiene un día?", "back": "1440"},
    {"front": "SM-2", "back": "Algoritmo de repetición espaciada"},
]


class Command(BaseCommand):
    help = "Recreate a demo user with one collection of sample cards."

    def add_arguments(self, parser):
        parser.add_argument("--username", default="demo", help="Demo user to (re)create")
        parser.add_argument("--collection", default="Demo", help="Collection name")
        parser.add_argument(
            "--file", default=None, help='JSON file with a list of {"front", "back"} objects'
        )

    def handle(self, *args, **options):
        cards = SAMPLE_CARDS
        if options["file"]:
            try:
                with open(options["file"], encoding="utf-8") as json_file:
                    cards = json.load(json_file)
            except (OSError, ValueError) as e:
                raise CommandError(f"Error loading cards: {e}")

        s = CardInSerializer(data=cards, many=True)
        if not s.is_valid():
            raise CommandError(f"Invalid cards: {s.errors}")
        cards = s.validated_data

        username = options["username"]
        with transaction.atomic():
            User.objects.filter(username=username).delete()
            self.stdout.write(self.style.SUCCESS(f"Existing data of {username} has been deleted"))

            user = User.objects.create_user(
                username, email=f"{username}@example.com", password="testpassword"
            )
            collection = create_collection(user, options["collection"])
            create_cards(user, collection.pk, cards)

        self.stdout.write(
            self.style.SUCCESS(
                f"Created {len(cards)} cards in '{collection.name}' for {username}"
            )
        )
