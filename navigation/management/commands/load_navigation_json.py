import json
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from navigation.models import NavigationItem
from navigation.serializers import NavigationItemWriteSerializer


class Command(BaseCommand):
    help = "Load navigation items from a JSON file (a list of items, optionally with nested 'children')"

    def add_arguments(self, parser):
        parser.add_argument("path", help="Path to the JSON file to load")
        parser.add_argument(
            "--replace",
            action="store_true",
            help="Delete every existing navigation item before loading",
        )

    def handle(self, *args, **options):
        path = Path(options["path"])
        if not path.exists():
            raise CommandError(f"File not found: {path}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CommandError(f"Invalid JSON in {path}: {exc}") from exc

        if not isinstance(data, list):
            raise CommandError("Expected a JSON list of navigation items")

        step = settings.NAVIGATION_POSITION_STEP
        with transaction.atomic():
            if options["replace"]:
                deleted, _ = NavigationItem.objects.all().delete()
                self.stdout.write(self.style.WARNING(f"Removed {deleted} existing items"))

            created = self._load_level(data, parent=None, step=step, trail="")

        self.stdout.write(self.style.SUCCESS(f"Loaded {created} navigation items from {path}"))

    def _load_level(self, entries, parent, step, trail):
        created = 0
        for i, entry in enumerate(entries):
            where = f"{trail}[{i}]"
            if not isinstance(entry, dict):
                self.stdout.write(self.style.WARNING(f"Skipping {where}: not an object"))
                continue

            payload = {k: v for k, v in entry.items() if k not in ("id", "children")}
            payload["parentId"] = parent.pk if parent else None
            payload.setdefault("position", i * step)

            serializer = NavigationItemWriteSerializer(data=payload)
            if not serializer.is_valid():
                # rolls back the whole load
                raise CommandError(f"Invalid navigation item at {where}: {serializer.errors}")

            item = serializer.save()
            created += 1

            children = entry.get("children") or []
            if not isinstance(children, list):
                self.stdout.write(self.style.WARNING(f"Skipping children of {where}: not a list"))
                continue
            created += self._load_level(children, parent=item, step=step, trail=f"{where}.children")
        return created
