from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Question',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Question name')),
                ('questiontext', models.TextField(blank=True, default='', verbose_name='Question text')),
                ('questiontextformat', models.PositiveSmallIntegerField(choices=[(0, 'Auto-format'), (1, 'HTML'), (2, 'Plain text'), (4, 'Markdown')], default=1)),
                ('generalfeedback', models.TextField(blank=True, default='', verbose_name='General feedback')),
                ('generalfeedbackformat', models.PositiveSmallIntegerField(choices=[(0, 'Auto-format'), (1, 'HTML'), (2, 'Plain text'), (4, 'Markdown')], default=1)),
                ('defaultmark', models.DecimalField(decimal_places=7, default=1, max_digits=12, verbose_name='Default mark')),
                ('mediatype', models.CharField(choices=[('audio', 'Audio'), ('video', 'Video'), ('customav', 'Customised A/V')], default='audio', max_length=8, verbose_name='Type of recording')),
                ('timelimitinseconds', models.PositiveIntegerField(default=30, verbose_name='Maximum recording duration')),
                ('contextid', models.PositiveIntegerField(default=1, verbose_name='Context')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Record audio/video question',
                'verbose_name_plural': 'Record audio/video questions',
                'ordering': ['-updated_at'],
            },
        ),
        migrations.CreateModel(
            name='Answer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('answer', models.CharField(max_length=32, verbose_name='Widget name')),
                ('feedback', models.TextField(blank=True, default='', verbose_name='Feedback')),
                ('feedbackformat', models.PositiveSmallIntegerField(choices=[(0, 'Auto-format'), (1, 'HTML'), (2, 'Plain text'), (4, 'Markdown')], default=1)),
                ('question', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='answers', to='questions.question', verbose_name='Question')),
            ],
            options={
                'verbose_name': 'Widget feedback',
                'verbose_name_plural': 'Widget feedback',
                'ordering': ['id'],
                'constraints': [models.UniqueConstraint(fields=('question', 'answer'), name='unique_widget_per_question')],
            },
        ),
    ]
