import json
from smtplib import SMTPException
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages
from django.core import mail
from django.core.cache import cache
from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse

from business_units.models import BusinessUnit
from community_clubs.models import CommunityClub
from .models import ContactMessage, GlobalVariable
from .presenters import contact_buttons, gallery_items, testimonial_cards
from .record_forms import MoreAboutFormSet, SocialMediaLinkForm
from .records import StringListField, move_record
from .tasks import notify_staff_of_contact_message
from .transforms import (
    decode_company_stats,
    decode_social_links,
    dump_records,
    encode_company_stats,
    encode_social_links,
    normalize_gallery_images,
    normalize_team_members,
    parse_activities,
    parse_services,
    split_list,
)
from .utils import unique_slugify

User = get_user_model()


def flashed(response):
    return [str(message) for message in get_messages(response.wsgi_request)]


class TransformTests(SimpleTestCase):

    def test_split_list_prefers_json(self):
        self.assertEqual(split_list('["Web", " Mobile ", ""]'), ['Web', 'Mobile'])

    def test_split_list_falls_back_to_newlines_then_commas(self):
        self.assertEqual(split_list("Web\nMobile, Apps\n"), ['Web', 'Mobile, Apps'])
        self.assertEqual(split_list("Web, Mobile,,Apps"), ['Web', 'Mobile', 'Apps'])
        self.assertEqual(split_list(''), [])
        self.assertEqual(split_list(None), [])

    def test_parse_services_reads_json_records(self):
        stored = json.dumps([{'id': 'service_x', 'title': 'Konsultasi', 'features': ['Audit']}])
        services = parse_services(stored)

        self.assertEqual(len(services), 1)
        self.assertEqual(services[0]['id'], 'service_x')
        self.assertEqual(services[0]['features'], ['Audit'])
        # Missing keys are filled from the defaults.
        self.assertEqual(services[0]['technologies'], [])
        self.assertTrue(services[0]['active'])

    def test_parse_services_reads_legacy_lines(self):
        services = parse_services("Web Development\n\nMobile Apps")

        self.assertEqual([s['title'] for s in services], ['Web Development', 'Mobile Apps'])
        self.assertEqual([s['id'] for s in services], ['service_0', 'service_1'])

    def test_parse_activities_splits_legacy_commas(self):
        activities = parse_activities("Futsal, Badminton")
        self.assertEqual([a['title'] for a in activities], ['Futsal', 'Badminton'])
        self.assertEqual(activities[0]['id'], 'activity_0')

    def test_defaults_are_not_shared_between_records(self):
        first, second = parse_services("A\nB")
        first['features'].append('changed')
        self.assertEqual(second['features'], [])

    def test_dump_records_stores_empty_lists_as_blank(self):
        self.assertEqual(dump_records([]), '')
        self.assertEqual(json.loads(dump_records([{'title': 'Kopi'}])), [{'title': 'Kopi'}])

    def test_social_links_round_trip_through_flat_fields(self):
        flat = {
            'social_links_linkedin': 'https://linkedin.com/in/budi',
            'social_links_twitter': '  ',
            'social_links_github': 'https://github.com/budi',
        }
        links = encode_social_links(flat)

        self.assertEqual([link['platform'] for link in links], ['linkedin', 'github'])
        self.assertEqual(decode_social_links(links)['social_links_twitter'], '')
        self.assertEqual(decode_social_links(links)['social_links_github'], 'https://github.com/budi')

    def test_decode_social_links_accepts_legacy_mapping_and_flat_fallback(self):
        decoded = decode_social_links(
            {'LinkedIn': 'https://linkedin.com/in/sari'},
            fallback={'social_links_github': 'https://github.com/sari'},
        )
        self.assertEqual(decoded['social_links_linkedin'], 'https://linkedin.com/in/sari')
        self.assertEqual(decoded['social_links_github'], 'https://github.com/sari')

    def test_company_stats_encode_skips_blanks_and_decodes_by_label(self):
        stats = encode_company_stats({'years_in_business': '10+', 'team_size': ''})
        self.assertEqual(stats, [{'label': 'Years in Business', 'value': '10+', 'icon': '📅'}])

        decoded = decode_company_stats([{'label': 'years in business', 'value': '12'}])
        self.assertEqual(decoded['years_in_business'], '12')
        self.assertEqual(decoded['clients_served'], '')

    def test_normalize_gallery_images_handles_nested_urls(self):
        images = normalize_gallery_images([
            {'url': {'url': 'https://cdn.example.com/a.jpg'}, 'mediaId': 7},
            'https://cdn.example.com/b.jpg',
            42,
        ])

        self.assertEqual(len(images), 2)
        self.assertEqual(images[0]['url'], 'https://cdn.example.com/a.jpg')
        self.assertEqual(images[0]['media_id'], 7)
        self.assertEqual(images[1]['id'], 'img_1')

    def test_normalize_team_members_prefers_list_links(self):
        members = normalize_team_members([
            {'name': 'Budi', 'social_links_github': 'https://github.com/budi'},
        ])
        self.assertEqual(members[0]['id'], 'member_0')
        self.assertEqual(members[0]['social_links'], [{'platform': 'github', 'url': 'https://github.com/budi'}])


class PresenterTests(SimpleTestCase):

    def test_gallery_items_fill_alt_and_caption(self):
        items = gallery_items('Kopi Nusantara', [{'url': ''}, {'url': 'https://cdn.example.com/a.jpg'}])

        self.assertEqual(len(items), 1)
        self.assertEqual(items[0]['alt'], 'Kopi Nusantara - Image 2')
        self.assertEqual(items[0]['caption'], 'Kopi Nusantara community activities and events')

    def test_testimonial_ratings_default_to_five(self):
        cards = testimonial_cards([{'name': 'Ani', 'rating': 9}, {'name': 'Dedi', 'rating': '3'}])
        self.assertEqual([card['rating'] for card in cards], [5, 3])
        self.assertEqual(cards[1]['stars'], '★★★☆☆')

    @override_settings(DEFAULT_CONTACT_EMAIL='info@example.com')
    def test_contact_buttons_fall_back_to_site_email(self):
        primary, secondary = contact_buttons('Kopi', email=None, phone=None)
        self.assertTrue(primary['href'].startswith('mailto:info@example.com'))
        self.assertEqual(secondary['label'], 'Kirim Email')

        _, secondary = contact_buttons('Kopi', email='kopi@example.com', phone='0812 3456')
        self.assertEqual(secondary['href'], 'tel:08123456')


class RecordEditingTests(SimpleTestCase):

    def formset_data(self, rows, initial=0):
        data = {'cards-TOTAL_FORMS': str(len(rows)), 'cards-INITIAL_FORMS': str(initial)}
        for index, row in enumerate(rows):
            for key, value in row.items():
                data[f'cards-{index}-{key}'] = value
        return data

    def test_move_record(self):
        self.assertEqual(move_record(['a', 'b', 'c'], 0, 2), ['b', 'c', 'a'])
        self.assertEqual(move_record(['a', 'b', 'c'], 2, 0), ['c', 'a', 'b'])
        with self.assertRaises(IndexError):
            move_record(['a'], 0, 1)

    def test_string_list_field(self):
        field = StringListField(separator=',')
        self.assertEqual(field.clean('Django, HTMX,, '), ['Django', 'HTMX'])
        self.assertEqual(field.prepare_value(['Django', 'HTMX']), 'Django, HTMX')
        self.assertFalse(field.has_changed(['Django'], 'Django'))

    def test_formset_initial_comes_from_records(self):
        formset = MoreAboutFormSet(prefix='cards', records=[{'id': 'about_1', 'title': 'Visi', 'description': 'Maju'}])
        self.assertEqual(formset.initial_form_count(), 1)
        self.assertEqual(formset.forms[0]['title'].value(), 'Visi')

    def test_to_records_follows_order_and_skips_deleted_and_blank_rows(self):
        records = [
            {'id': 'about_a', 'title': 'A', 'description': 'a'},
            {'id': 'about_b', 'title': 'B', 'description': 'b'},
            {'id': 'about_c', 'title': 'C', 'description': 'c'},
        ]
        data = self.formset_data([
            {'id': 'about_a', 'title': 'A', 'description': 'a', 'ORDER': '2'},
            {'id': 'about_b', 'title': 'B', 'description': 'b', 'ORDER': '1'},
            {'id': 'about_c', 'title': 'C', 'description': 'c', 'ORDER': '3', 'DELETE': 'on'},
            {'id': '', 'title': '', 'description': '', 'ORDER': ''},
        ], initial=3)
        formset = MoreAboutFormSet(data, prefix='cards', records=records)

        self.assertTrue(formset.is_valid())
        self.assertEqual([r['id'] for r in formset.to_records()], ['about_b', 'about_a'])

    def test_renumbered_blank_row_is_still_ignored(self):
        data = self.formset_data([
            {'id': '', 'title': 'Visi', 'description': 'Maju', 'ORDER': '2'},
            {'id': '', 'title': '', 'description': '', 'ORDER': '1'},
        ])
        formset = MoreAboutFormSet(data, prefix='cards', records=[])

        self.assertTrue(formset.is_valid())
        self.assertEqual([r['title'] for r in formset.to_records()], ['Visi'])

    def test_new_rows_get_generated_ids(self):
        data = self.formset_data([{'id': '', 'title': 'Misi', 'description': 'Melayani', 'ORDER': ''}])
        formset = MoreAboutFormSet(data, prefix='cards', records=[])

        self.assertTrue(formset.is_valid())
        record = formset.to_records()[0]
        self.assertTrue(record['id'].startswith('about_'))
        self.assertEqual(record['title'], 'Misi')

    def test_formset_rejects_more_rows_than_max(self):
        rows = [{'title': f'Kartu {i}', 'description': 'x', 'ORDER': str(i)} for i in range(7)]
        formset = MoreAboutFormSet(self.formset_data(rows), prefix='cards', records=[])

        self.assertFalse(formset.is_valid())
        self.assertTrue(formset.non_form_errors())

    def test_social_media_links_accept_legacy_mapping(self):
        records = SocialMediaLinkForm.normalize_records({'Instagram': 'https://instagram.com/klub'})
        self.assertEqual(records, [{'platform': 'instagram', 'url': 'https://instagram.com/klub'}])


class GlobalVariableTests(TestCase):

    def test_set_and_get_typed_values(self):
        GlobalVariable.set_value('company_values', ['Jujur', 'Peduli'], type=GlobalVariable.TYPE_JSON)
        GlobalVariable.set_value('show_banner', False, type=GlobalVariable.TYPE_BOOLEAN)
        GlobalVariable.set_value('founded', 1998, type=GlobalVariable.TYPE_NUMBER)

        self.assertEqual(GlobalVariable.get_value('company_values'), ['Jujur', 'Peduli'])
        self.assertIs(GlobalVariable.get_value('show_banner'), False)
        self.assertEqual(GlobalVariable.get_value('founded'), 1998.0)
        self.assertEqual(GlobalVariable.get_value('missing', 'n/a'), 'n/a')

    def test_set_value_updates_existing_key(self):
        GlobalVariable.set_value('company_phone', '021-111')
        GlobalVariable.set_value('company_phone', '021-222')
        self.assertEqual(GlobalVariable.objects.filter(key='company_phone').count(), 1)
        self.assertEqual(GlobalVariable.get_value('company_phone'), '021-222')

    def test_public_values_skip_private_variables(self):
        GlobalVariable.objects.create(key='company_name', value='CIGI')
        GlobalVariable.objects.create(key='api_token', value='secret', is_public=False)

        self.assertEqual(GlobalVariable.public_values(), {'company_name': 'CIGI'})
        self.assertEqual(GlobalVariable.public_values(['api_token']), {})

    def test_invalid_json_reads_as_none(self):
        variable = GlobalVariable.objects.create(key='broken', value='{nope', type=GlobalVariable.TYPE_JSON)
        self.assertIsNone(variable.typed_value)


class ContactMessageModelTests(TestCase):

    def setUp(self):
        self.contact_message = ContactMessage.objects.create(
            name='Ani', email='ani@example.com', subject='Kerja sama', message='Halo'
        )

    def test_new_messages_are_unread(self):
        self.assertTrue(self.contact_message.is_unread)
        self.assertIsNone(self.contact_message.read_at)

    def test_mark_as_read_keeps_first_read_time(self):
        self.contact_message.mark_as_read()
        first_read = self.contact_message.read_at
        self.assertIsNotNone(first_read)

        self.contact_message.mark_as_archived()
        self.contact_message.mark_as_read()
        self.assertEqual(self.contact_message.read_at, first_read)

    def test_mark_as_unread_clears_read_time(self):
        self.contact_message.mark_as_read()
        self.contact_message.mark_as_unread()
        self.contact_message.refresh_from_db()
        self.assertIsNone(self.contact_message.read_at)
        self.assertEqual(self.contact_message.status, ContactMessage.STATUS_UNREAD)

    def test_stats(self):
        ContactMessage.objects.create(
            name='Budi', email='budi@example.com', subject='Tanya', message='?', status=ContactMessage.STATUS_ARCHIVED
        )
        stats = ContactMessage.stats()
        self.assertEqual(stats, {'total': 2, 'unread': 1, 'read': 0, 'archived': 1, 'recent': 2})


class ContactPageTests(TestCase):

    def setUp(self):
        self.url = reverse('core:contact')
        self.data = {
            'name': 'Ani',
            'email': 'ani@example.com',
            'phone': '0812-1111-2222',
            'subject': 'Kerja sama',
            'message': 'Kami ingin bekerja sama.',
        }

    def test_get_renders_form(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'core/contact.html')

    def test_valid_post_stores_message_and_queues_notification(self):
        with patch('core.signals.notify_staff_of_contact_message') as task, \
                self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(self.url, self.data, HTTP_USER_AGENT='TestBrowser', REMOTE_ADDR='10.0.0.5')

        self.assertRedirects(response, self.url)
        contact_message = ContactMessage.objects.get()
        self.assertEqual(contact_message.status, ContactMessage.STATUS_UNREAD)
        self.assertEqual(contact_message.ip_address, '10.0.0.5')
        self.assertEqual(contact_message.user_agent, 'TestBrowser')
        task.delay.assert_called_once_with(contact_message.pk)
        self.assertIn("Pesan Anda telah berhasil dikirim. Kami akan segera menghubungi Anda.", flashed(response))

    def test_invalid_post_rerenders_with_errors(self):
        response = self.client.post(self.url, {**self.data, 'email': 'bukan-email'})
        self.assertEqual(response.status_code, 200)
        self.assertFalse(ContactMessage.objects.exists())
        self.assertTrue(response.context['form'].errors)

    def test_honeypot_rejects_bots(self):
        response = self.client.post(self.url, {**self.data, 'nickname': 'bot'})
        self.assertEqual(response.status_code, 200)
        self.assertFalse(ContactMessage.objects.exists())


@override_settings(CONTACT_NOTIFICATION_EMAIL='staff@example.com')
class ContactNotificationTaskTests(TestCase):

    def setUp(self):
        self.contact_message = ContactMessage.objects.create(
            name='Ani', email='ani@example.com', subject='Kerja sama', message='Halo'
        )

    def test_sends_email_with_reply_to_sender(self):
        self.assertTrue(notify_staff_of_contact_message(self.contact_message.pk))

        self.assertEqual(len(mail.outbox), 1)
        email = mail.outbox[0]
        self.assertEqual(email.to, ['staff@example.com'])
        self.assertEqual(email.reply_to, ['ani@example.com'])
        self.assertIn('Kerja sama', email.subject)
        html_content = email.alternatives[0][0]
        self.assertIn(reverse('core:staff_contact_message_detail', args=[self.contact_message.pk]), html_content)

    def test_missing_message_is_skipped(self):
        self.assertFalse(notify_staff_of_contact_message(999999))
        self.assertEqual(len(mail.outbox), 0)

    @override_settings(CONTACT_NOTIFICATION_EMAIL='')
    def test_no_recipient_is_skipped(self):
        self.assertFalse(notify_staff_of_contact_message(self.contact_message.pk))
        self.assertEqual(len(mail.outbox), 0)

    def test_send_failure_is_raised_for_retry(self):
        with patch('core.tasks.EmailMultiAlternatives.send', side_effect=SMTPException('down')):
            with self.assertRaises(SMTPException):
                notify_staff_of_contact_message(self.contact_message.pk)


class PublicPageTests(TestCase):

    def setUp(self):
        cache.clear()
        BusinessUnit.objects.create(name='Kopi Nusantara', image='https://cdn.example.com/kopi.jpg')
        BusinessUnit.objects.create(name='Unit Lama', image='https://cdn.example.com/lama.jpg', is_active=False)
        CommunityClub.objects.create(name='Klub Futsal', type='Olahraga')
        GlobalVariable.objects.create(key='hero_title', value='Selamat Datang di CIGI')

    def test_home_shows_active_content_and_variables(self):
        response = self.client.get(reverse('core:home'))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Kopi Nusantara')
        self.assertContains(response, 'Klub Futsal')
        self.assertContains(response, 'Selamat Datang di CIGI')
        self.assertNotContains(response, 'Unit Lama')

    def test_about_counts_active_rows(self):
        response = self.client.get(reverse('core:about'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['business_units_count'], 1)
        self.assertEqual(response.context['community_clubs_count'], 1)


class NavigationTests(TestCase):

    def setUp(self):
        cache.clear()
        self.staff = User.objects.create_user('staff', 'staff@example.com', 'password123', is_staff=True)
        BusinessUnit.objects.create(name='Kopi Nusantara', sort_order=1)
        BusinessUnit.objects.create(name='Unit Lama', is_active=False)
        CommunityClub.objects.create(name='Klub Futsal', type='Olahraga')

    def test_navigation_data_lists_active_rows(self):
        response = self.client.get(reverse('core:navigation_data'))
        data = response.json()

        self.assertEqual([unit['name'] for unit in data['business_units']], ['Kopi Nusantara'])
        self.assertEqual(data['community_clubs'][0]['type'], 'Olahraga')
        self.assertEqual(data['club_types'], ['Olahraga'])

    def test_navigation_data_is_cached_until_content_changes(self):
        self.client.get(reverse('core:navigation_data'))

        # Bulk updates bypass signals, so the cached copy is served.
        BusinessUnit.objects.filter(name='Kopi Nusantara').update(name='Kopi Baru')
        data = self.client.get(reverse('core:navigation_data')).json()
        self.assertEqual(data['business_units'][0]['name'], 'Kopi Nusantara')

        # Saving through the model clears the cache.
        BusinessUnit.objects.create(name='Agro Mandiri', sort_order=2)
        data = self.client.get(reverse('core:navigation_data')).json()
        self.assertEqual([unit['name'] for unit in data['business_units']], ['Kopi Baru', 'Agro Mandiri'])

    def test_navigation_is_limited(self):
        for index in range(8):
            BusinessUnit.objects.create(name=f'Unit {index}', sort_order=10 + index)
        data = self.client.get(reverse('core:navigation_data')).json()
        self.assertEqual(len(data['business_units']), 6)

    def test_clear_cache_endpoint(self):
        url = reverse('core:navigation_cache_clear')
        self.client.force_login(self.staff)

        self.assertEqual(self.client.get(url).status_code, 405)
        response = self.client.post(url)
        self.assertEqual(response.json(), {'message': 'Navigation cache cleared successfully'})

    def test_clear_cache_endpoint_requires_staff(self):
        user = User.objects.create_user('member', 'member@example.com', 'password123')
        self.client.force_login(user)
        response = self.client.post(reverse('core:navigation_cache_clear'))
        self.assertEqual(response.status_code, 302)


class StaffAccessTests(TestCase):

    def setUp(self):
        self.url = reverse('core:staff_dashboard')

    def test_anonymous_users_are_sent_to_login(self):
        response = self.client.get(self.url)
        self.assertRedirects(response, f"{reverse('login')}?next={self.url}", fetch_redirect_response=False)

    def test_non_staff_users_are_forbidden(self):
        user = User.objects.create_user('member', 'member@example.com', 'password123')
        self.client.force_login(user)
        self.assertEqual(self.client.get(self.url).status_code, 403)

    def test_staff_dashboard(self):
        staff = User.objects.create_user('staff', 'staff@example.com', 'password123', is_staff=True)
        ContactMessage.objects.create(name='Ani', email='ani@example.com', subject='Halo', message='Hi')
        self.client.force_login(staff)

        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['stats']['unread_messages'], 1)


class ContactMessageStaffTests(TestCase):

    def setUp(self):
        self.staff = User.objects.create_user('staff', 'staff@example.com', 'password123', is_staff=True)
        self.client.force_login(self.staff)
        self.first = ContactMessage.objects.create(name='Ani', email='ani@example.com', subject='Kerja sama', message='Halo')
        self.second = ContactMessage.objects.create(name='Budi', email='budi@example.com', subject='Lowongan', message='Hai')

    def test_list_filters_by_status_and_search(self):
        self.second.mark_as_archived()
        url = reverse('core:staff_contact_message_list')

        response = self.client.get(url, {'status': 'archived'})
        self.assertEqual(list(response.context['contact_messages']), [self.second])

        response = self.client.get(url, {'search': 'kerja'})
        self.assertEqual(list(response.context['contact_messages']), [self.first])
        self.assertEqual(response.context['stats']['total'], 2)

    def test_list_ignores_unknown_sort_fields(self):
        response = self.client.get(reverse('core:staff_contact_message_list'), {'sort_by': 'password', 'per_page': 'x'})
        self.assertEqual(response.status_code, 200)

    def test_detail_marks_message_read(self):
        response = self.client.get(reverse('core:staff_contact_message_detail', args=[self.first.pk]))

        self.assertEqual(response.status_code, 200)
        self.first.refresh_from_db()
        self.assertEqual(self.first.status, ContactMessage.STATUS_READ)
        self.assertIsNotNone(self.first.read_at)

    def test_status_update(self):
        url = reverse('core:staff_contact_message_status', args=[self.first.pk])
        response = self.client.post(url, {'status': 'archived'})

        self.assertRedirects(response, reverse('core:staff_contact_message_detail', args=[self.first.pk]), fetch_redirect_response=False)
        self.first.refresh_from_db()
        self.assertEqual(self.first.status, ContactMessage.STATUS_ARCHIVED)
        self.assertIn("Status pesan berhasil diperbarui.", flashed(response))

    def test_bulk_mark_read_and_delete(self):
        url = reverse('core:staff_contact_message_bulk')

        response = self.client.post(url, {'action': 'mark_read', 'ids': [self.first.pk, self.second.pk]})
        self.assertEqual(ContactMessage.objects.read().count(), 2)
        self.assertIn("2 pesan berhasil ditandai sudah dibaca.", flashed(response))

        response = self.client.post(url, {'action': 'delete', 'ids': [self.first.pk]})
        self.assertEqual(list(ContactMessage.objects.all()), [self.second])
        self.assertIn("1 pesan berhasil dihapus.", flashed(response))

    def test_bulk_without_selection_is_rejected(self):
        response = self.client.post(reverse('core:staff_contact_message_bulk'), {'action': 'archive'})
        self.assertEqual(ContactMessage.objects.archived().count(), 0)
        self.assertIn("Pilih pesan dan aksi yang valid.", flashed(response))

    def test_delete(self):
        url = reverse('core:staff_contact_message_delete', args=[self.first.pk])
        self.assertEqual(self.client.get(url).status_code, 200)

        response = self.client.post(url)
        self.assertRedirects(response, reverse('core:staff_contact_message_list'), fetch_redirect_response=False)
        self.assertFalse(ContactMessage.objects.filter(pk=self.first.pk).exists())


class GlobalVariableStaffTests(TestCase):

    def setUp(self):
        self.staff = User.objects.create_user('staff', 'staff@example.com', 'password123', is_staff=True)
        self.client.force_login(self.staff)

    def test_create_variable(self):
        response = self.client.post(reverse('core:staff_global_variable_create'), {
            'key': 'company_email',
            'value': 'halo@cigi.co.id',
            'type': 'email',
            'category': 'contact',
            'description': '',
            'is_public': 'on',
        })

        self.assertRedirects(response, reverse('core:staff_global_variable_list'), fetch_redirect_response=False)
        self.assertEqual(GlobalVariable.get_value('company_email'), 'halo@cigi.co.id')
        self.assertIn("Variabel global berhasil ditambahkan.", flashed(response))

    def test_value_is_validated_against_type(self):
        response = self.client.post(reverse('core:staff_global_variable_create'), {
            'key': 'company_values',
            'value': '[not json',
            'type': 'json',
            'category': 'general',
        })

        self.assertEqual(response.status_code, 200)
        self.assertIn('value', response.context['form'].errors)
        self.assertFalse(GlobalVariable.objects.exists())

    def test_list_groups_by_category(self):
        GlobalVariable.objects.create(key='company_phone', value='021', category='contact')
        GlobalVariable.objects.create(key='hero_title', value='Halo', category='home')

        response = self.client.get(reverse('core:staff_global_variable_list'))
        self.assertEqual(list(response.context['grouped_variables']), ['contact', 'home'])

    def test_update_and_delete(self):
        variable = GlobalVariable.objects.create(key='office_hours', value='08-17')

        self.client.post(reverse('core:staff_global_variable_update', args=[variable.pk]), {
            'key': 'office_hours', 'value': '09-18', 'type': 'text', 'category': 'contact', 'is_public': 'on',
        })
        variable.refresh_from_db()
        self.assertEqual(variable.value, '09-18')

        self.client.post(reverse('core:staff_global_variable_delete', args=[variable.pk]))
        self.assertFalse(GlobalVariable.objects.exists())


class UniqueSlugTests(TestCase):

    def test_collisions_get_numeric_suffix(self):
        first = BusinessUnit.objects.create(name='Kopi Nusantara')
        second = BusinessUnit.objects.create(name='Kopi Nusantara')

        self.assertEqual(first.slug, 'kopi-nusantara')
        self.assertEqual(second.slug, 'kopi-nusantara-2')
        self.assertEqual(unique_slugify(first, 'Kopi Nusantara'), 'kopi-nusantara')
