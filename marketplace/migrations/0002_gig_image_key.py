from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("marketplace", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="gig",
            name="image_key",
            field=models.CharField(blank=True, default="", editable=False, max_length=300),
        ),
    ]
