"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data [--clear]

This creates:
- 4 users (admin, alice, bob, charlie)
- 1 group (Family) with alice, bob and charlie as members
- A few wishlist items, one of them already gotten

Notifications are not sent while seeding.
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User
from apps.core.storage import get_storage
from apps.groups.models import Group
from apps.groups.services import create_group, add_member
from apps.notifications.dispatcher import NotificationDispatcher
from apps.wishlists.services import add_wishlist_item, mark_purchased


SAMPLE_ITEMS = {
    'alice': [
        {'name': 'Pour-over kettle', 'price': '$45', 'url': 'https://example.com/kettle'},
        {'name': 'Hiking boots', 'price': '$120', 'description': 'Size 39'},
    ],
    'bob': [
        {'name': 'Board game', 'price': '$35'},
        {'name': 'Concert tickets', 'is_surprise': True},
    ],
    'charlie': [
        {'name': 'Cookbook', 'price': '$25'},
    ],
}


class Command(BaseCommand):
    help = 'Create sample users, a group and wishlist items'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        storage = get_storage()
        dispatcher = NotificationDispatcher(enabled=False)

        users = self.create_users()
        group = self.create_group(users, storage, dispatcher)
        items = self.create_items(users, group, storage, dispatcher)

        # Bob bought one of Alice's items
        mark_purchased(
            item_id=items['alice'][0].id,
            user=users['bob'],
            receipt=None,
            storage=storage,
            dispatcher=dispatcher,
        )

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin / admin123 (superuser)')
        self.stdout.write('  alice / password123')
        self.stdout.write('  bob / password123')
        self.stdout.write('  charlie / password123')

    def clear_data(self):
        """Remove sample users and every group."""
        Group.objects.all().delete()
        User.objects.filter(username__in=['admin', 'alice', 'bob', 'charlie']).delete()

    def create_users(self):
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            username='admin',
            defaults={'is_staff': True, 'is_superuser': True},
        )
        admin.set_password('admin123')
        admin.save()

        users = {'admin': admin}
        for username in ('alice', 'bob', 'charlie'):
            user, _ = User.objects.get_or_create(
                username=username,
                defaults={'email': f'{username}@example.com'},
            )
            user.set_password('password123')
            user.save()
            users[username] = user

        return users

    def create_group(self, users, storage, dispatcher):
        self.stdout.write('  Creating group...')

        group = create_group(name='Family', creator=users['alice'], storage=storage)
        for username in ('bob', 'charlie'):
            add_member(
                group_id=group.id,
                username=username,
                added_by=users['alice'],
                storage=storage,
                dispatcher=dispatcher,
            )
        return group

    def create_items(self, users, group, storage, dispatcher):
        self.stdout.write('  Creating wishlist items...')

        created = {}
        for username, entries in SAMPLE_ITEMS.items():
            created[username] = [
                add_wishlist_item(
                    group_id=group.id,
                    user=users[username],
                    fields=fields,
                    storage=storage,
                    dispatcher=dispatcher,
                )
                for fields in entries
            ]
        return created
