import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Account',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=150)),
                ('email', models.EmailField(max_length=254, unique=True)),
                ('password', models.CharField(help_text='Stored and compared in the clear', max_length=128)),
                ('plan', models.CharField(choices=[('Free', 'Free'), ('Basic', 'Basic'), ('Pro', 'Pro'), ('Business', 'Business')], default='Free', max_length=32)),
                ('storage_used', models.BigIntegerField(default=0, help_text='Currently used storage in bytes')),
                ('storage_limit', models.BigIntegerField(default=5368709120, help_text='Storage limit of the current plan in bytes')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Account',
                'verbose_name_plural': 'Accounts',
                'ordering': ['created_at'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('storage_used__gte', 0)), name='storage_used_non_negative'),
                    models.CheckConstraint(condition=models.Q(('storage_limit__gt', 0)), name='storage_limit_positive'),
                ],
            },
        ),
    ]
