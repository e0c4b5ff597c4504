"""
Tests for notification listing, read-marking and clearing.
"""
from datetime import timedelta

from django.test import TestCase, Client
from django.utils import timezone

from apps.identity.jwt_auth import SESSION_COOKIE_NAME, create_session_token
from apps.identity.models import User
from apps.notifications import services
from apps.notifications.models import Notification, NotificationType


def make_user(username):
    return User.objects.create_user(
        username=username,
        email=f"{username}@test.com",
        password="testpass123",
        full_name=username.title(),
    )


class NotificationServiceTest(TestCase):

    def setUp(self):
        self.alice = make_user("alice")
        self.bob = make_user("bob")
        self.carol = make_user("carol")

        self.older = services.notify(self.alice, self.bob, NotificationType.FOLLOW)
        self.newer = services.notify(self.carol, self.bob, NotificationType.LIKE)
        Notification.objects.filter(id=self.older.id).update(created_at=timezone.now() - timedelta(hours=1))

    def test_notify_rejects_unknown_type(self):
        with self.assertRaises(ValueError):
            services.notify(self.alice, self.bob, 'comment')

    def test_list_is_newest_first(self):
        notifications = services.list_notifications(self.bob)
        self.assertEqual([n.id for n in notifications], [self.newer.id, self.older.id])

    def test_list_marks_read_but_returns_previous_state(self):
        notifications = services.list_notifications(self.bob)
        self.assertTrue(all(not n.read for n in notifications))
        self.assertFalse(Notification.objects.filter(recipient=self.bob, read=False).exists())

        again = services.list_notifications(self.bob)
        self.assertTrue(all(n.read for n in again))

    def test_list_only_own(self):
        self.assertEqual(services.list_notifications(self.alice), [])
        self.assertTrue(Notification.objects.filter(recipient=self.bob, read=False).exists())

    def test_clear_only_own(self):
        services.notify(self.bob, self.alice, NotificationType.FOLLOW)
        self.assertEqual(services.clear_notifications(self.bob), 2)
        self.assertEqual(Notification.objects.filter(recipient=self.bob).count(), 0)
        self.assertEqual(Notification.objects.filter(recipient=self.alice).count(), 1)


class NotificationAPITest(TestCase):

    def setUp(self):
        self.client = Client()
        self.alice = make_user("alice")
        self.bob = make_user("bob")
        self.client.cookies[SESSION_COOKIE_NAME] = create_session_token(self.bob.id)

    def test_list_shape(self):
        services.notify(self.alice, self.bob, NotificationType.FOLLOW)

        response = self.client.get('/api/notifications')
        self.assertEqual(response.status_code, 200)

        data = response.json()
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]['from']['username'], 'alice')
        self.assertEqual(data[0]['from']['_id'], str(self.alice.id))
        self.assertEqual(data[0]['to'], str(self.bob.id))
        self.assertEqual(data[0]['type'], 'follow')
        self.assertFalse(data[0]['read'])

        data = self.client.get('/api/notifications').json()
        self.assertTrue(data[0]['read'])

    def test_follow_through_api_notifies(self):
        alice_client = Client()
        alice_client.cookies[SESSION_COOKIE_NAME] = create_session_token(self.alice.id)
        alice_client.post(f'/api/users/follow/{self.bob.id}')

        data = self.client.get('/api/notifications').json()
        self.assertEqual([n['type'] for n in data], ['follow'])

    def test_delete_all(self):
        services.notify(self.alice, self.bob, NotificationType.LIKE)
        response = self.client.delete('/api/notifications')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['message'], 'All notifications deleted')
        self.assertEqual(Notification.objects.count(), 0)

    def test_requires_session(self):
        self.assertEqual(Client().get('/api/notifications').status_code, 401)
