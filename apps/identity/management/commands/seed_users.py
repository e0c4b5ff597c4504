from django.core.management.base import BaseCommand
from apps.identity.models import User
from apps.posts.models import Post


class Command(BaseCommand):
    help = 'Seeds the database with demo users, follows and posts'

    def add_arguments(self, parser):
        parser.add_argument(
            '--password',
            default='password',
            help='Password for every demo user',
        )

    def handle(self, *args, **options):
        users = [
            {'username': 'alice', 'full_name': 'Alice Moreau', 'bio': 'Coffee, code, climbing.'},
            {'username': 'bob', 'full_name': 'Bob Okafor', 'bio': 'Photographer.'},
            {'username': 'carol', 'full_name': 'Carol Nguyen', 'bio': ''},
            {'username': 'dave', 'full_name': 'Dave Lindqvist', 'bio': 'Here for the memes.'},
        ]

        seeded = {}
        for u in users:
            user, created = User.objects.get_or_create(
                username=u['username'],
                defaults={'email': f"{u['username']}@example.com"},
            )
            user.full_name = u['full_name']
            user.bio = u['bio']

            if created:
                user.set_password(options['password'])
                user.save()
                self.stdout.write(self.style.SUCCESS(f'Created user: {user.username}'))
            else:
                user.save()
                self.stdout.write(self.style.WARNING(f'Updated user: {user.username}'))
            seeded[user.username] = user

        # alice <-> bob, carol -> alice
        seeded['alice'].following.add(seeded['bob'])
        seeded['bob'].following.add(seeded['alice'])
        seeded['carol'].following.add(seeded['alice'])

        for username, text in [
            ('alice', 'Hello from the seed script!'),
            ('bob', 'Golden hour never gets old.'),
        ]:
            _, created = Post.objects.get_or_create(user=seeded[username], text=text)
            if created:
                self.stdout.write(self.style.SUCCESS(f'Created post for {username}'))
