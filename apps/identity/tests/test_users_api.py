"""
Tests for profile endpoints: lookup, suggestions and updates.
"""
import json
import shutil
import tempfile
from unittest import mock

from django.test import TestCase, Client, override_settings

from apps.core.errors import AuthError, ConflictError, ValidationError
from apps.identity import services
from apps.identity.jwt_auth import SESSION_COOKIE_NAME, create_session_token
from apps.identity.models import User

PNG_DATA_URI = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def make_user(username, password="testpass123"):
    return User.objects.create_user(
        username=username,
        email=f"{username}@test.com",
        password=password,
        full_name=username.title(),
    )


class ProfileAPITest(TestCase):

    def setUp(self):
        self.client = Client()
        self.alice = make_user("alice")
        self.client.cookies[SESSION_COOKIE_NAME] = create_session_token(self.alice.id)

    def test_get_profile(self):
        make_user("bob")
        response = self.client.get('/api/users/profile/bob')
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['username'], 'bob')
        self.assertEqual(data['fullName'], 'Bob')
        self.assertEqual(data['profileImg'], '')
        self.assertNotIn('password', data)

    def test_unknown_profile_is_404(self):
        response = self.client.get('/api/users/profile/ghost')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['message'], 'User not found')


class SuggestedUsersTest(TestCase):

    def setUp(self):
        self.alice = make_user("alice")
        self.others = [make_user(f"user{i}") for i in range(5)]

    def test_at_most_three_and_never_self(self):
        suggested = services.suggested_users(self.alice)
        self.assertLessEqual(len(suggested), 3)
        self.assertNotIn(self.alice, suggested)

    def test_excludes_followed_users(self):
        self.alice.following.add(*self.others[:4])
        suggested = services.suggested_users(self.alice)
        self.assertEqual(suggested, [self.others[4]])

    def test_endpoint(self):
        client = Client()
        client.cookies[SESSION_COOKIE_NAME] = create_session_token(self.alice.id)
        response = client.get('/api/users/suggested')
        self.assertEqual(response.status_code, 200)
        usernames = [u['username'] for u in response.json()]
        self.assertEqual(len(usernames), 3)
        self.assertNotIn('alice', usernames)


class UpdateProfileServiceTest(TestCase):

    def setUp(self):
        self.alice = make_user("alice", password="oldpass123")

    def test_updates_text_fields(self):
        user = services.update_profile(self.alice, {'fullName': 'Alice Liddell', 'bio': 'hi', 'link': 'https://a.example'})
        self.assertEqual(user.full_name, 'Alice Liddell')
        self.assertEqual(user.bio, 'hi')
        self.assertEqual(user.link, 'https://a.example')

    def test_none_keeps_and_empty_clears(self):
        self.alice.bio = 'old bio'
        self.alice.save()
        services.update_profile(self.alice, {'bio': None})
        self.assertEqual(self.alice.bio, 'old bio')
        services.update_profile(self.alice, {'bio': ''})
        self.alice.refresh_from_db()
        self.assertEqual(self.alice.bio, '')

    def test_change_password(self):
        services.update_profile(self.alice, {'currentPassword': 'oldpass123', 'newPassword': 'newpass456'})
        self.alice.refresh_from_db()
        self.assertTrue(self.alice.check_password('newpass456'))

    def test_only_one_password_is_rejected(self):
        with self.assertRaises(ValidationError):
            services.update_profile(self.alice, {'newPassword': 'newpass456'})

    def test_wrong_current_password(self):
        with self.assertRaises(AuthError) as ctx:
            services.update_profile(self.alice, {'currentPassword': 'nope', 'newPassword': 'newpass456'})
        self.assertEqual(ctx.exception.status_code, 400)

    def test_username_taken(self):
        make_user("bob")
        with self.assertRaises(ConflictError):
            services.update_profile(self.alice, {'username': 'bob'})

    def test_email_taken(self):
        make_user("bob")
        with self.assertRaises(ConflictError):
            services.update_profile(self.alice, {'email': 'bob@test.com'})

    def test_over_length_fields_are_rejected(self):
        for data, message in [
            ({'bio': 'b' * 281}, "Bio must be at most 280 characters"),
            ({'username': 'u' * 151}, "Username must be at most 150 characters"),
            ({'fullName': 'F' * 151}, "Full name must be at most 150 characters"),
            ({'link': 'https://' + 'l' * 250}, "Link must be at most 255 characters"),
        ]:
            with self.assertRaises(ValidationError) as ctx:
                services.update_profile(self.alice, data)
            self.assertEqual(ctx.exception.message, message)

        self.alice.refresh_from_db()
        self.assertEqual(self.alice.bio, '')
        self.assertEqual(self.alice.username, 'alice')

    def test_bio_at_limit_is_accepted(self):
        services.update_profile(self.alice, {'bio': 'b' * 280})
        self.alice.refresh_from_db()
        self.assertEqual(len(self.alice.bio), 280)

    def test_lost_race_on_username_conflicts(self):
        make_user("bob")
        # "bob" is taken after the check but before the save
        with mock.patch.object(services, '_username_taken', side_effect=[False, True]):
            with self.assertRaises(ConflictError) as ctx:
                services.update_profile(self.alice, {'username': 'bob'})
        self.assertEqual(ctx.exception.message, "Username already exists")
        self.assertEqual(User.objects.get(id=self.alice.id).username, 'alice')


class UpdateProfileAPITest(TestCase):

    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.media_root, ignore_errors=True)
        self.client = Client()
        self.alice = make_user("alice", password="oldpass123")
        self.client.cookies[SESSION_COOKIE_NAME] = create_session_token(self.alice.id)

    def post_update(self, payload):
        return self.client.post('/api/users/update', data=json.dumps(payload), content_type='application/json')

    def test_update_returns_user(self):
        response = self.post_update({'fullName': 'Alice Liddell', 'bio': 'down the rabbit hole'})
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['fullName'], 'Alice Liddell')
        self.assertEqual(data['bio'], 'down the rabbit hole')

    def test_wrong_current_password_is_400(self):
        response = self.post_update({'currentPassword': 'nope', 'newPassword': 'newpass456'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Invalid current password')

    def test_profile_image_upload_replaces_old(self):
        with override_settings(MEDIA_ROOT=self.media_root):
            first = self.post_update({'profileImg': PNG_DATA_URI}).json()['profileImg']
            self.alice.refresh_from_db()
            old_name = self.alice.profile_img

            second = self.post_update({'profileImg': PNG_DATA_URI}).json()['profileImg']
            self.alice.refresh_from_db()

            from django.core.files.storage import default_storage
            self.assertTrue(first.startswith('/media/avatars/'))
            self.assertNotEqual(first, second)
            self.assertFalse(default_storage.exists(old_name))
            self.assertTrue(default_storage.exists(self.alice.profile_img))

    def test_over_length_bio_is_400(self):
        response = self.post_update({'bio': 'b' * 300})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Bio must be at most 280 characters')

    def test_invalid_image_is_400(self):
        response = self.post_update({'coverImg': 'data:text/plain;base64,aGVsbG8='})
        self.assertEqual(response.status_code, 400)
