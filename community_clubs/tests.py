import json
from datetime import date

from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages
from django.core.cache import cache
from django.test import TestCase
from django.urls import reverse

from .forms import CommunityClubEditor
from .models import CommunityClub, CommunityClubActivity
from .presenters import club_statistics

User = get_user_model()


def editor_data(fields, sections=None, initial=None):
    sections = sections or {}
    initial = initial or {}
    data = dict(fields)
    for name, _, _ in CommunityClubEditor.sections:
        rows = sections.get(name, [])
        data[f'{name}-TOTAL_FORMS'] = str(len(rows))
        data[f'{name}-INITIAL_FORMS'] = str(initial.get(name, 0))
        for index, row in enumerate(rows):
            for key, value in row.items():
                data[f'{name}-{index}-{key}'] = value
    return data


def flashed(response):
    return [str(message) for message in get_messages(response.wsgi_request)]


CLUB_FIELDS = {
    'name': 'Klub Futsal Cigi',
    'slug': '',
    'type': 'Olahraga',
    'description': 'Main futsal setiap minggu.',
    'image': '',
    'contact_person': 'Andi',
    'contact_phone': '0812-0000-1111',
    'contact_email': '',
    'meeting_schedule': 'Sabtu 08:00',
    'location': 'GOR Cigi',
    'is_active': 'on',
    'sort_order': '0',
    'founded_year': '2015',
    'member_count': '40',
    'hero_subtitle': '',
    'hero_cta_text': '',
    'hero_cta_link': '',
}


class CommunityClubModelTests(TestCase):

    def setUp(self):
        cache.clear()
        self.club = CommunityClub.objects.create(
            name='Klub Futsal Cigi',
            type='Olahraga',
            activities='Futsal, Turnamen Antar Kampung',
            contact_person='Andi',
            meeting_schedule='Sabtu 08:00',
            founded_year=date.today().year - 5,
            member_count=40,
            upcoming_events=[{'title': 'Turnamen'}],
        )

    def test_legacy_activities_are_parsed(self):
        self.assertEqual(self.club.activities_list, ['Futsal', 'Turnamen Antar Kampung'])
        self.assertEqual(self.club.activities_count, 2)
        self.assertTrue(self.club.has_activity('Futsal'))

    def test_json_activities(self):
        club = CommunityClub.objects.create(
            name='Klub Baca',
            type='Pendidikan',
            activities=json.dumps([{'title': 'Diskusi Buku', 'benefits': ['Wawasan']}]),
        )
        record = club.activity_records[0]
        self.assertEqual(record['benefits'], ['Wawasan'])
        self.assertTrue(record['active'])

    def test_helpers(self):
        self.assertEqual(self.club.years_active, 5)
        self.assertTrue(self.club.has_meeting_info)
        self.assertFalse(self.club.has_contact)
        self.assertEqual([method['type'] for method in self.club.contact_methods()], ['person'])
        self.assertTrue(self.club.display_image.endswith('images/default-community-club.jpg'))

    def test_statistics(self):
        stats = {stat['label']: stat['value'] for stat in club_statistics(self.club)}
        self.assertEqual(stats, {'Anggota': 40, 'Tahun Aktif': 5, 'Kegiatan': 2, 'Acara Mendatang': 1})

    def test_statistics_count_only_renderable_events(self):
        self.club.upcoming_events = [{'title': 'Turnamen'}, 'catatan lama', None]
        stats = {stat['label']: stat['value'] for stat in club_statistics(self.club)}
        self.assertEqual(stats['Acara Mendatang'], 1)

    def test_types_and_grouping(self):
        CommunityClub.objects.create(name='Klub Doa', type='Keagamaan')
        CommunityClub.objects.create(name='Klub Lama', type='Budaya', is_active=False)

        self.assertEqual(CommunityClub.types(), ['Keagamaan', 'Olahraga'])
        self.assertEqual(list(CommunityClub.grouped_by_type()), ['Keagamaan', 'Olahraga'])

    def test_querysets(self):
        quiet = CommunityClub.objects.create(name='Klub Sepi', type='Olahraga')

        self.assertEqual(list(CommunityClub.objects.with_activities()), [self.club])
        self.assertEqual(list(CommunityClub.objects.with_meeting_info()), [self.club])
        self.assertEqual(list(CommunityClub.objects.by_activity('turnamen')), [self.club])
        self.assertEqual(list(CommunityClub.objects.search('olahraga').order_by('name')), [self.club, quiet])
        self.assertEqual(list(self.club.related_clubs()), [quiet])


class CommunityClubPublicViewTests(TestCase):

    def setUp(self):
        cache.clear()
        self.futsal = CommunityClub.objects.create(
            name='Klub Futsal Cigi',
            type='Olahraga',
            activities=json.dumps([
                {'title': 'Latihan Rutin'},
                {'title': 'Kegiatan Rahasia', 'active': False},
            ]),
            upcoming_events=[{'title': 'Turnamen Agustusan', 'date': '2026-08-17'}],
            social_media_links={'Instagram': 'https://instagram.com/futsalcigi'},
        )
        self.choir = CommunityClub.objects.create(name='Paduan Suara', type='Budaya')
        self.inactive = CommunityClub.objects.create(name='Klub Lama', type='Olahraga', is_active=False)

    def test_list_groups_by_type(self):
        response = self.client.get(reverse('community_clubs:list'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(sorted(response.context['grouped_clubs']), ['Budaya', 'Olahraga'])
        self.assertNotContains(response, 'Klub Lama')

    def test_list_filters_by_type(self):
        response = self.client.get(reverse('community_clubs:list'), {'type': 'Budaya'})
        self.assertEqual(list(response.context['community_clubs']), [self.choir])
        self.assertEqual(response.context['selected_type'], 'Budaya')

    def test_detail_and_inactive(self):
        response = self.client.get(self.futsal.get_absolute_url())
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['social_links'], [{'platform': 'instagram', 'url': 'https://instagram.com/futsalcigi'}])

        response = self.client.get(reverse('community_clubs:detail', args=[self.inactive.slug]))
        self.assertEqual(response.status_code, 404)

    def test_activities_tab_hides_inactive_records(self):
        response = self.client.get(reverse('community_clubs:tab', args=[self.futsal.slug, 'activities']))
        self.assertContains(response, 'Latihan Rutin')
        self.assertNotContains(response, 'Kegiatan Rahasia')

    def test_events_tab_over_htmx(self):
        response = self.client.get(self.futsal.get_absolute_url(), {'tab': 'events'}, HTTP_HX_REQUEST='true')
        self.assertTemplateUsed(response, 'community_clubs/partials/tab_events.html')
        self.assertContains(response, 'Turnamen Agustusan')

    def test_htmx_tab_swaps_the_tab_nav_out_of_band(self):
        response = self.client.get(reverse('community_clubs:tab', args=[self.futsal.slug, 'events']))
        self.assertContains(response, 'hx-swap-oob="true"')
        self.assertContains(response, 'tab-active', count=1)
        self.assertEqual(response.context['active_tab'], 'events')

    def test_history_restore_gets_the_full_page(self):
        response = self.client.get(
            self.futsal.get_absolute_url(), {'tab': 'events'},
            HTTP_HX_REQUEST='true', HTTP_HX_HISTORY_RESTORE_REQUEST='true',
        )
        self.assertTemplateUsed(response, 'community_clubs/detail.html')
        self.assertContains(response, 'Turnamen Agustusan')

    def test_unknown_tab(self):
        response = self.client.get(reverse('community_clubs:tab', args=[self.futsal.slug, 'rahasia']))
        self.assertEqual(response.status_code, 404)


class CommunityClubEditorTests(TestCase):

    def setUp(self):
        cache.clear()
        self.staff = User.objects.create_user('staff', 'staff@example.com', 'password123', is_staff=True)
        self.client.force_login(self.staff)
        self.create_url = reverse('community_clubs:staff_create')

    def test_create_form_lists_club_types(self):
        response = self.client.get(self.create_url)
        self.assertContains(response, 'id="club-types"')
        self.assertContains(response, '<option value="Keagamaan">')

    def test_create_saves_records(self):
        data = editor_data(CLUB_FIELDS, sections={
            'activities': [
                {'id': '', 'title': 'Latihan Rutin', 'benefits': 'Sehat\nKompak', 'max_participants': '20', 'ORDER': '1'},
                {'id': '', 'title': 'Futsal Malam', 'is_hidden': 'on', 'ORDER': '2'},
            ],
            'upcoming_events': [
                {'id': '', 'title': 'Turnamen', 'date': '2026-08-17', 'ORDER': '1'},
            ],
            'testimonials': [
                {'id': '', 'name': 'Rudi', 'content': 'Seru!', 'rating': '', 'ORDER': '1'},
            ],
            'social_media_links': [
                {'id': '', 'platform': 'instagram', 'url': 'https://instagram.com/futsalcigi', 'ORDER': '1'},
            ],
        })
        response = self.client.post(self.create_url, data)

        self.assertRedirects(response, reverse('community_clubs:staff_list'), fetch_redirect_response=False)
        self.assertIn("Komunitas berhasil ditambahkan.", flashed(response))

        club = CommunityClub.objects.get()
        first, second = club.activity_records
        self.assertEqual(first['benefits'], ['Sehat', 'Kompak'])
        self.assertEqual(first['max_participants'], 20)
        self.assertTrue(first['active'])
        self.assertFalse(second['active'])
        self.assertEqual(club.upcoming_events[0]['date'], '2026-08-17')
        self.assertEqual(club.testimonials[0]['rating'], 5)
        self.assertEqual(club.social_media_links[0]['platform'], 'instagram')
        self.assertEqual(club.gallery_images, [])

    def test_invalid_social_link_is_rejected(self):
        data = editor_data(CLUB_FIELDS, sections={
            'social_media_links': [{'id': '', 'platform': 'instagram', 'url': 'bukan url', 'ORDER': '1'}],
        })
        response = self.client.post(self.create_url, data)

        self.assertEqual(response.status_code, 200)
        self.assertFalse(CommunityClub.objects.exists())
        self.assertIn('social_media_links', response.context['editor'].error_summary)

    def test_upcoming_events_are_capped_at_three(self):
        rows = [{'id': '', 'title': f'Acara {i}', 'ORDER': str(i + 1)} for i in range(3)]
        data = editor_data(CLUB_FIELDS, sections={'upcoming_events': rows})
        data['editor_action'] = 'add:upcoming_events'
        response = self.client.post(self.create_url, data)
        self.assertEqual(response.context['editor'].formsets['upcoming_events'].total_form_count(), 3)

        rows.append({'id': '', 'title': 'Acara 4', 'ORDER': '4'})
        response = self.client.post(self.create_url, editor_data(CLUB_FIELDS, sections={'upcoming_events': rows}))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(CommunityClub.objects.exists())

    def test_update_reads_legacy_social_mapping_and_activity_text(self):
        club = CommunityClub.objects.create(
            name='Klub Futsal Cigi',
            type='Olahraga',
            activities='Futsal\nTurnamen',
            social_media_links={'Instagram': 'https://instagram.com/futsalcigi'},
        )
        url = reverse('community_clubs:staff_update', args=[club.slug])

        editor = self.client.get(url).context['editor']
        self.assertEqual(editor.formsets['activities'].initial_form_count(), 2)
        link_form = editor.formsets['social_media_links'].forms[0]
        self.assertEqual(link_form['platform'].value(), 'instagram')

        data = editor_data({**CLUB_FIELDS, 'slug': club.slug}, sections={
            'activities': [
                {'id': 'activity_0', 'title': 'Futsal', 'ORDER': '2'},
                {'id': 'activity_1', 'title': 'Turnamen', 'ORDER': '1'},
            ],
            'social_media_links': [
                {'id': '', 'platform': 'instagram', 'url': 'https://instagram.com/futsalcigi', 'ORDER': '1'},
            ],
        }, initial={'activities': 2, 'social_media_links': 1})
        response = self.client.post(url, data)

        self.assertIn("Komunitas berhasil diperbarui.", flashed(response))
        club.refresh_from_db()
        self.assertEqual(club.activities_list, ['Turnamen', 'Futsal'])
        self.assertEqual(json.loads(club.activities)[0]['id'], 'activity_1')
        self.assertIsInstance(club.social_media_links, list)

    def test_delete(self):
        club = CommunityClub.objects.create(name='Klub Futsal Cigi', type='Olahraga')
        response = self.client.post(reverse('community_clubs:staff_delete', args=[club.slug]))

        self.assertRedirects(response, reverse('community_clubs:staff_list'), fetch_redirect_response=False)
        self.assertFalse(CommunityClub.objects.exists())


class CommunityClubActivityStaffTests(TestCase):

    def setUp(self):
        cache.clear()
        self.staff = User.objects.create_user('staff', 'staff@example.com', 'password123', is_staff=True)
        self.client.force_login(self.staff)
        self.club = CommunityClub.objects.create(name='Klub Futsal Cigi', type='Olahraga')
        self.other_club = CommunityClub.objects.create(name='Paduan Suara', type='Budaya')

    def activity_fields(self, **overrides):
        fields = {
            'community_club': str(self.club.pk),
            'title': 'Latihan Rutin',
            'short_description': 'Latihan mingguan',
            'description': '',
            'image': '',
            'duration': '2 jam',
            'max_participants': '20',
            'requirements': '',
            'benefits': 'Sehat\nKompak',
            'status': 'active',
            'is_active': 'on',
            'schedule': 'Sabtu 08:00',
            'location': 'GOR Cigi',
            'contact_info': '',
        }
        fields.update(overrides)
        return fields

    def test_create(self):
        response = self.client.post(reverse('community_clubs:staff_activity_create'), self.activity_fields())

        self.assertRedirects(response, reverse('community_clubs:staff_activity_list'), fetch_redirect_response=False)
        activity = CommunityClubActivity.objects.get()
        self.assertEqual(activity.benefits, ['Sehat', 'Kompak'])
        self.assertIn("Kegiatan berhasil ditambahkan.", flashed(response))

    def test_create_prefills_club(self):
        response = self.client.get(reverse('community_clubs:staff_activity_create'), {'community_club': self.club.pk})
        self.assertEqual(response.context['form'].initial['community_club'], self.club.pk)

    def test_max_participants_must_be_positive(self):
        response = self.client.post(reverse('community_clubs:staff_activity_create'), self.activity_fields(max_participants='0'))
        self.assertEqual(response.status_code, 200)
        self.assertIn('max_participants', response.context['form'].errors)

    def test_update_keeps_image_when_left_blank(self):
        activity = CommunityClubActivity.objects.create(
            community_club=self.club, title='Latihan Rutin', image='https://cdn.example.com/futsal.jpg'
        )
        url = reverse('community_clubs:staff_activity_update', args=[activity.pk])
        response = self.client.post(url, self.activity_fields(title='Latihan Pagi'))

        self.assertIn("Kegiatan berhasil diperbarui.", flashed(response))
        activity.refresh_from_db()
        self.assertEqual(activity.title, 'Latihan Pagi')
        self.assertEqual(activity.image, 'https://cdn.example.com/futsal.jpg')

    def test_list_filters(self):
        CommunityClubActivity.objects.create(community_club=self.club, title='Latihan')
        CommunityClubActivity.objects.create(community_club=self.club, title='Turnamen', is_active=False)
        CommunityClubActivity.objects.create(community_club=self.other_club, title='Latihan Vokal')
        url = reverse('community_clubs:staff_activity_list')

        response = self.client.get(url, {'community_club': self.club.pk, 'status': 'active'})
        self.assertEqual([a.title for a in response.context['activities']], ['Latihan'])

        response = self.client.get(url, {'search': 'vokal'})
        self.assertEqual([a.title for a in response.context['activities']], ['Latihan Vokal'])

        response = self.client.get(url, {'status': 'inactive'})
        self.assertEqual([a.title for a in response.context['activities']], ['Turnamen'])

    def test_detail_and_delete(self):
        activity = CommunityClubActivity.objects.create(community_club=self.club, title='Latihan', benefits=['Sehat'])
        response = self.client.get(reverse('community_clubs:staff_activity_detail', args=[activity.pk]))
        self.assertContains(response, 'Sehat')

        response = self.client.post(reverse('community_clubs:staff_activity_delete', args=[activity.pk]))
        self.assertRedirects(response, reverse('community_clubs:staff_activity_list'), fetch_redirect_response=False)
        self.assertIn("Kegiatan berhasil dihapus.", flashed(response))

    def test_club_detail_lists_activity_pages(self):
        CommunityClubActivity.objects.create(community_club=self.club, title='Latihan')
        response = self.client.get(reverse('community_clubs:staff_detail', args=[self.club.slug]))
        self.assertContains(response, 'Latihan')
