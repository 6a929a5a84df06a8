from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Juz",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("juz_number", models.PositiveSmallIntegerField(unique=True)),
                ("surah_list", models.CharField(max_length=255)),
            ],
            options={
                "db_table": "juz",
                "ordering": ["juz_number"],
                "verbose_name_plural": "juz",
            },
        ),
        migrations.CreateModel(
            name="Surah",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("surah_number", models.PositiveSmallIntegerField(unique=True)),
                ("name", models.CharField(max_length=64, unique=True)),
                ("total_ayat", models.PositiveSmallIntegerField()),
            ],
            options={
                "db_table": "surah",
                "ordering": ["surah_number"],
            },
        ),
    ]
