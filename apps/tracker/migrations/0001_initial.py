import django.db.models.deletion
from django.db import migrations, models


QUALITY_CHOICES = [
    ("excellent", "Excellent"),
    ("good", "Good"),
    ("average", "Average"),
    ("needsWork", "Needs work"),
    ("horrible", "Horrible"),
]
QUARTER_CHOICES = [(1, "1"), (2, "2"), (3, "3"), (4, "4")]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Student",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("student_no", models.CharField(max_length=20, unique=True)),
                ("name", models.CharField(max_length=150)),
                ("joined_at", models.DateField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="ProgressEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("lesson_type", models.CharField(blank=True, choices=[("hifz", "Sabaq"), ("nazirah", "Nazirah"), ("qaida", "Qaida")], max_length=10, null=True)),
                ("current_juz", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("current_surah", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("end_surah", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("start_ayat", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("end_ayat", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("verses_memorized", models.PositiveIntegerField(blank=True, null=True)),
                ("pages_memorized", models.PositiveIntegerField(blank=True, null=True)),
                ("quran_format", models.CharField(blank=True, choices=[("13", "13-line"), ("15", "15-line")], max_length=2, null=True)),
                ("qaida_lesson", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("memorization_quality", models.CharField(blank=True, choices=QUALITY_CHOICES, max_length=10, null=True)),
                ("teacher_notes", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="progress_entries", to="tracker.student")),
            ],
            options={
                "db_table": "progress",
                "ordering": ["-date", "-created_at"],
                "verbose_name_plural": "progress entries",
            },
        ),
        migrations.CreateModel(
            name="SabaqParaEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("revision_date", models.DateField()),
                ("juz_number", models.PositiveSmallIntegerField()),
                ("quarters_revised", models.CharField(choices=[("1st_quarter", "1st quarter"), ("2_quarters", "2 quarters"), ("3_quarters", "3 quarters"), ("4_quarters", "4 quarters")], max_length=12)),
                ("quality_rating", models.CharField(blank=True, choices=QUALITY_CHOICES, max_length=10, null=True)),
                ("teacher_notes", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="sabaq_para_entries", to="tracker.student")),
            ],
            options={
                "db_table": "sabaq_para",
                "ordering": ["-revision_date", "-created_at"],
            },
        ),
        migrations.CreateModel(
            name="JuzRevisionEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("revision_date", models.DateField()),
                ("juz_revised", models.PositiveSmallIntegerField()),
                ("dhor_slot", models.PositiveSmallIntegerField(default=1)),
                ("quarter_start", models.PositiveSmallIntegerField(blank=True, choices=QUARTER_CHOICES, null=True)),
                ("quarters_covered", models.PositiveSmallIntegerField(blank=True, choices=QUARTER_CHOICES, null=True)),
                ("memorization_quality", models.CharField(blank=True, choices=QUALITY_CHOICES, max_length=10, null=True)),
                ("teacher_notes", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="juz_revisions", to="tracker.student")),
            ],
            options={
                "db_table": "juz_revisions",
                "ordering": ["-revision_date", "dhor_slot"],
                "unique_together": {("student", "revision_date", "dhor_slot")},
            },
        ),
    ]
