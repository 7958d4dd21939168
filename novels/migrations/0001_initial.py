from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Novel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('slug', models.SlugField(blank=True, max_length=255, unique=True)),
                ('author', models.CharField(blank=True, max_length=255)),
                ('alternative_titles', models.TextField(blank=True)),
                ('description', models.TextField(blank=True)),
                ('search_index', models.TextField(blank=True, editable=False)),
                ('cover_image', models.ImageField(blank=True, null=True, upload_to='novels/covers/')),
                ('novel_format', models.CharField(choices=[('WN', 'Web Novel'), ('LN', 'Light Novel')], default='WN', max_length=2)),
                ('status', models.CharField(choices=[('ONGOING', 'Đang ra'), ('COMPLETED', 'Hoàn thành'), ('HIATUS', 'Tạm dừng'), ('DROPPED', 'Ngưng dịch')], db_index=True, default='ONGOING', max_length=20)),
                ('approval_status', models.CharField(choices=[('PENDING', 'Chờ duyệt'), ('APPROVED', 'Đã duyệt'), ('REJECTED', 'Từ chối')], db_index=True, default='PENDING', max_length=20)),
                ('discount_percent', models.PositiveSmallIntegerField(default=0)),
                ('is_licensed_drop', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('uploader', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='uploaded_novels', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Truyện',
                'verbose_name_plural': 'Truyện',
                'ordering': ['-updated_at'],
            },
        ),
        migrations.CreateModel(
            name='Volume',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('order', models.PositiveIntegerField(default=0)),
                ('novel', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='volumes', to='novels.novel')),
            ],
            options={
                'verbose_name': 'Tập',
                'verbose_name_plural': 'Tập',
                'ordering': ['order'],
            },
        ),
        migrations.CreateModel(
            name='Chapter',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('slug', models.SlugField(blank=True, max_length=255)),
                ('order', models.PositiveIntegerField(default=0)),
                ('content', models.TextField(blank=True)),
                ('word_count', models.PositiveIntegerField(default=0)),
                ('is_draft', models.BooleanField(db_index=True, default=False)),
                ('publish_at', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('is_locked', models.BooleanField(default=False)),
                ('price', models.PositiveIntegerField(default=0, help_text='Giá mở khóa (vé)')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('volume', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='chapters', to='novels.volume')),
            ],
            options={
                'verbose_name': 'Chương',
                'verbose_name_plural': 'Chương',
                'ordering': ['volume__order', 'order'],
                'indexes': [models.Index(fields=['is_draft', 'publish_at'], name='chapter_draft_publish_idx')],
            },
        ),
        migrations.CreateModel(
            name='Library',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('novel', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='followers', to='novels.novel')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='library', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Tủ truyện',
                'verbose_name_plural': 'Tủ truyện',
                'unique_together': {('user', 'novel')},
            },
        ),
    ]
