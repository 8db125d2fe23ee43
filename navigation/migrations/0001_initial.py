import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="NavigationItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("label", models.CharField(max_length=255)),
                (
                    "icon",
                    models.CharField(
                        choices=[
                            ("IconHome", "Home"),
                            ("IconChalkboard", "Chalkboard"),
                            ("IconBuildingBank", "Building Bank"),
                            ("IconBriefcase", "Briefcase"),
                            ("IconShield", "Shield"),
                            ("IconBulb", "Bulb"),
                            ("IconFlask", "Flask"),
                            ("IconChartBar", "Chart Bar"),
                            ("IconBraces", "Braces"),
                            ("IconFileAnalytics", "File Analytics"),
                            ("IconMessageCircle", "Message Circle"),
                            ("IconUsersGroup", "Users Group"),
                            ("IconUser", "User"),
                            ("IconRobot", "Robot"),
                            ("IconTools", "Tools"),
                        ],
                        default="IconHome",
                        max_length=64,
                    ),
                ),
                (
                    "link",
                    models.CharField(
                        blank=True,
                        help_text="Route or external URL. Required for links, derived from the label for pages.",
                        max_length=512,
                        null=True,
                    ),
                ),
                ("description", models.TextField(blank=True, null=True)),
                (
                    "type",
                    models.CharField(
                        choices=[("link", "Link"), ("section", "Section"), ("page", "Page")],
                        default="link",
                        max_length=16,
                    ),
                ),
                ("requires_role", models.CharField(blank=True, max_length=100, null=True)),
                ("position", models.IntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="children",
                        to="navigation.navigationitem",
                    ),
                ),
                (
                    "tool",
                    models.ForeignKey(
                        blank=True,
                        help_text="If empty: visible to every signed-in user. Else: needs a grant for this tool.",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="navigation_items",
                        to="accounts.tool",
                    ),
                ),
            ],
            options={
                "verbose_name": "Navigation Item",
                "verbose_name_plural": "Navigation Items",
                "ordering": ["position", "id"],
            },
        ),
    ]
