import json

from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages
from django.core.cache import cache
from django.test import TestCase
from django.urls import reverse

from .forms import BusinessUnitEditor, BusinessUnitServiceEditor
from .models import BusinessUnit, BusinessUnitService

User = get_user_model()


def editor_data(editor_class, fields, sections=None, initial=None):
    """POST data for a record editor: model fields plus every section's management form."""
    sections = sections or {}
    initial = initial or {}
    data = dict(fields)
    for name, _, _ in editor_class.sections:
        rows = sections.get(name, [])
        data[f'{name}-TOTAL_FORMS'] = str(len(rows))
        data[f'{name}-INITIAL_FORMS'] = str(initial.get(name, 0))
        for index, row in enumerate(rows):
            for key, value in row.items():
                data[f'{name}-{index}-{key}'] = value
    return data


def flashed(response):
    return [str(message) for message in get_messages(response.wsgi_request)]


UNIT_FIELDS = {
    'name': 'Kopi Nusantara',
    'slug': '',
    'description': 'Kedai dan roastery kopi.',
    'image': '',
    'contact_phone': '021-555-0101',
    'contact_email': 'kopi@example.com',
    'address': '',
    'website_url': '',
    'operating_hours': 'Senin-Jumat 08:00-17:00, Sabtu 08:00-12:00',
    'is_active': 'on',
    'sort_order': '1',
    'hero_subtitle': '',
    'hero_cta_text': '',
    'hero_cta_link': '',
    'years_in_business': '10',
    'projects_completed': '',
    'clients_served': '',
    'team_size': '',
    'company_stats_is_show': 'on',
}


class BusinessUnitModelTests(TestCase):

    def setUp(self):
        cache.clear()
        self.unit = BusinessUnit.objects.create(
            name='Kopi Nusantara',
            services=json.dumps([
                {'id': 'service_a', 'title': 'Roasting'},
                {'id': 'service_b', 'title': 'Pelatihan Barista', 'active': False},
            ]),
            operating_hours='Senin-Jumat 08:00-17:00, Sabtu 08:00-12:00',
            contact_phone='021-555-0101',
        )

    def test_slug_is_generated(self):
        self.assertEqual(self.unit.slug, 'kopi-nusantara')
        self.assertEqual(self.unit.get_absolute_url(), '/unit-bisnis/kopi-nusantara/')

    def test_services_helpers(self):
        self.assertEqual(self.unit.service_titles, ['Roasting', 'Pelatihan Barista'])
        self.assertEqual(self.unit.services_count, 2)
        self.assertTrue(self.unit.has_service(' Roasting '))
        self.assertFalse(self.unit.has_service('Catering'))

    def test_legacy_service_text(self):
        unit = BusinessUnit.objects.create(name='Agro', services="Pupuk Organik\nBibit Unggul")
        self.assertEqual(unit.service_titles, ['Pupuk Organik', 'Bibit Unggul'])
        self.assertEqual(BusinessUnit.objects.by_service('Bibit').get(), unit)

    def test_operating_hours_and_contact(self):
        self.assertEqual(self.unit.operating_hours_list, ['Senin-Jumat 08:00-17:00', 'Sabtu 08:00-12:00'])
        self.assertTrue(self.unit.has_contact)
        self.assertEqual([method['type'] for method in self.unit.contact_methods()], ['phone'])

    def test_display_image_falls_back_to_default(self):
        self.assertTrue(self.unit.display_image.endswith('images/default-business-unit.jpg'))
        self.unit.image = 'https://cdn.example.com/kopi.jpg'
        self.assertEqual(self.unit.display_image, 'https://cdn.example.com/kopi.jpg')

    def test_section_visible_needs_toggle_and_content(self):
        self.unit.portfolio_items = [{'title': 'Cafe Senopati'}]
        self.assertFalse(self.unit.section_visible('portfolio'))
        self.unit.portfolio_is_show = True
        self.assertTrue(self.unit.section_visible('portfolio'))
        self.unit.portfolio_items = []
        self.assertFalse(self.unit.section_visible('portfolio'))

    def test_querysets(self):
        inactive = BusinessUnit.objects.create(name='Unit Lama', is_active=False, image='x.jpg')
        with_image = BusinessUnit.objects.create(name='Agro', image='https://cdn.example.com/agro.jpg')

        self.assertNotIn(inactive, BusinessUnit.objects.active())
        self.assertEqual(list(BusinessUnit.objects.featured()), [with_image])
        self.assertEqual(list(BusinessUnit.objects.with_contact()), [self.unit])
        self.assertEqual(list(BusinessUnit.objects.search('barista')), [self.unit])
        self.assertEqual(list(self.unit.related_units()), [with_image])

    def test_all_services_are_distinct(self):
        BusinessUnit.objects.create(name='Agro', services=json.dumps([{'title': 'Roasting'}, {'title': 'Pupuk'}]))
        self.assertEqual(BusinessUnit.all_services(), ['Roasting', 'Pupuk', 'Pelatihan Barista'])

    def test_process_steps_are_ordered(self):
        service = BusinessUnitService.objects.create(
            business_unit=self.unit,
            title='Konsultasi',
            process_steps=[{'step': 'Desain', 'order': 2}, {'step': 'Analisis', 'order': 1}],
        )
        self.assertEqual([step['step'] for step in service.ordered_process_steps], ['Analisis', 'Desain'])


class BusinessUnitPublicViewTests(TestCase):

    def setUp(self):
        cache.clear()
        self.unit = BusinessUnit.objects.create(
            name='Kopi Nusantara',
            description='Kedai kopi.',
            services=json.dumps([
                {'title': 'Roasting', 'features': ['Arabika']},
                {'title': 'Menu Tersembunyi', 'active': False},
            ]),
        )
        self.inactive = BusinessUnit.objects.create(name='Unit Lama', is_active=False)

    def test_list_shows_active_units(self):
        response = self.client.get(reverse('business_units:list'))
        self.assertContains(response, 'Kopi Nusantara')
        self.assertNotContains(response, 'Unit Lama')

    def test_list_search(self):
        BusinessUnit.objects.create(name='Agro Mandiri')
        response = self.client.get(reverse('business_units:list'), {'q': 'roasting'})
        self.assertEqual(list(response.context['business_units']), [self.unit])

    def test_detail(self):
        response = self.client.get(self.unit.get_absolute_url())
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'business_units/detail.html')
        self.assertEqual(response.context['active_tab'], 'overview')

    def test_inactive_unit_is_not_found(self):
        response = self.client.get(reverse('business_units:detail', args=[self.inactive.slug]))
        self.assertEqual(response.status_code, 404)

    def test_services_tab_hides_inactive_services(self):
        response = self.client.get(self.unit.get_absolute_url(), {'tab': 'services'})
        self.assertContains(response, 'Roasting')
        self.assertContains(response, 'Arabika')
        self.assertNotContains(response, 'Menu Tersembunyi')

    def test_unknown_tab_query_falls_back_to_overview(self):
        response = self.client.get(self.unit.get_absolute_url(), {'tab': 'rahasia'})
        self.assertEqual(response.context['active_tab'], 'overview')

    def test_htmx_request_gets_only_the_tab(self):
        response = self.client.get(self.unit.get_absolute_url(), {'tab': 'services'}, HTTP_HX_REQUEST='true')
        self.assertTemplateUsed(response, 'business_units/partials/tab_services.html')
        self.assertTemplateNotUsed(response, 'business_units/detail.html')

    def test_htmx_tab_swaps_the_tab_nav_out_of_band(self):
        response = self.client.get(self.unit.get_absolute_url(), {'tab': 'services'}, HTTP_HX_REQUEST='true')
        self.assertContains(response, 'id="tab-nav"')
        self.assertContains(response, 'hx-swap-oob="true"')
        self.assertContains(response, 'tab-active', count=1)
        self.assertEqual(response.context['active_tab'], 'services')

    def test_history_restore_gets_the_full_page(self):
        response = self.client.get(
            self.unit.get_absolute_url(), {'tab': 'team'},
            HTTP_HX_REQUEST='true', HTTP_HX_HISTORY_RESTORE_REQUEST='true',
        )
        self.assertTemplateUsed(response, 'business_units/detail.html')
        self.assertTemplateUsed(response, 'business_units/partials/tab_team.html')
        self.assertEqual(response.context['active_tab'], 'team')

    def test_tab_view(self):
        url = reverse('business_units:tab', args=[self.unit.slug, 'contact'])
        response = self.client.get(url)
        self.assertTemplateUsed(response, 'business_units/partials/tab_contact.html')

        response = self.client.get(reverse('business_units:tab', args=[self.unit.slug, 'rahasia']))
        self.assertEqual(response.status_code, 404)


class BusinessUnitEditorTests(TestCase):

    def setUp(self):
        cache.clear()
        self.staff = User.objects.create_user('staff', 'staff@example.com', 'password123', is_staff=True)
        self.client.force_login(self.staff)
        self.create_url = reverse('business_units:staff_create')

    def test_staff_pages_require_staff(self):
        self.client.logout()
        self.assertEqual(self.client.get(self.create_url).status_code, 302)

        user = User.objects.create_user('member', 'member@example.com', 'password123')
        self.client.force_login(user)
        self.assertEqual(self.client.get(self.create_url).status_code, 403)

    def test_create_form_renders(self):
        response = self.client.get(self.create_url)
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'name="services-TOTAL_FORMS"')

    def test_create_saves_records(self):
        data = editor_data(BusinessUnitEditor, UNIT_FIELDS, sections={
            'services': [
                {
                    'id': '', 'title': 'Roasting', 'price_range': 'Rp 50.000',
                    'features': 'Arabika\nRobusta', 'technologies': 'Probat, Giesen',
                    'process_steps': 'Pilih: biji terbaik\nSangrai', 'ORDER': '1',
                },
                {'id': '', 'title': 'Katering', 'is_hidden': 'on', 'ORDER': '2'},
            ],
            'team_members': [
                {'id': '', 'name': 'Budi', 'role': 'CEO', 'social_links_linkedin': 'https://linkedin.com/in/budi', 'ORDER': '1'},
            ],
        })
        response = self.client.post(self.create_url, data)

        self.assertRedirects(response, reverse('business_units:staff_list'), fetch_redirect_response=False)
        self.assertIn("Unit bisnis berhasil ditambahkan.", flashed(response))

        unit = BusinessUnit.objects.get()
        self.assertEqual(unit.slug, 'kopi-nusantara')

        roasting, catering = unit.services_list
        self.assertTrue(roasting['id'].startswith('service_'))
        self.assertEqual(roasting['features'], ['Arabika', 'Robusta'])
        self.assertEqual(roasting['technologies'], ['Probat', 'Giesen'])
        self.assertEqual(roasting['process_steps'], [
            {'step': 'Pilih', 'description': 'biji terbaik', 'order': 1},
            {'step': 'Sangrai', 'description': '', 'order': 2},
        ])
        self.assertTrue(roasting['active'])
        self.assertFalse(catering['active'])

        member = unit.team_members[0]
        self.assertEqual(member['social_links'], [{'platform': 'linkedin', 'url': 'https://linkedin.com/in/budi'}])

    def test_create_ignores_blank_row_after_drag_reorder(self):
        data = editor_data(BusinessUnitEditor, UNIT_FIELDS, sections={
            'more_about': [
                {'id': '', 'title': 'Visi', 'description': 'Maju', 'ORDER': '2'},
                {'id': '', 'title': '', 'description': '', 'ORDER': '1'},
            ],
        })
        response = self.client.post(self.create_url, data)

        self.assertRedirects(response, reverse('business_units:staff_list'), fetch_redirect_response=False)
        unit = BusinessUnit.objects.get()
        self.assertEqual([card['title'] for card in unit.more_about], ['Visi'])

    def test_add_then_move_then_save(self):
        data = editor_data(BusinessUnitEditor, UNIT_FIELDS, sections={
            'more_about': [{'id': '', 'title': 'Visi', 'description': 'Maju', 'ORDER': '1'}],
        })
        editor = BusinessUnitEditor.from_action(data, 'add:more_about')
        editor = BusinessUnitEditor.from_action(editor.data, 'move:more_about:0:1')
        self.assertEqual(editor.data['more_about-0-ORDER'], '2')
        self.assertEqual(editor.data['more_about-1-ORDER'], '1')

        editor = BusinessUnitEditor(editor.data)
        self.assertTrue(editor.is_valid(), editor.error_summary)
        unit = editor.save()
        self.assertEqual([card['title'] for card in unit.more_about], ['Visi'])
        self.assertNotIn('social_links_linkedin', member)

        self.assertEqual([(s['label'], s['value']) for s in unit.company_stats], [('Years in Business', '10')])
        self.assertEqual(unit.gallery_images, [])

    def test_invalid_submission_is_not_saved(self):
        data = editor_data(BusinessUnitEditor, {**UNIT_FIELDS, 'name': ''}, sections={
            'more_about': [{'id': '', 'title': 'Visi', 'description': '', 'ORDER': '1'}],
        })
        response = self.client.post(self.create_url, data)

        self.assertEqual(response.status_code, 200)
        self.assertFalse(BusinessUnit.objects.exists())
        editor = response.context['editor']
        self.assertTrue(editor.show_errors)
        self.assertIn('name', editor.error_summary)
        self.assertIn('more_about', editor.error_summary)

    def test_add_action_appends_a_row_without_saving(self):
        data = editor_data(BusinessUnitEditor, UNIT_FIELDS)
        data['editor_action'] = 'add:gallery_images'
        response = self.client.post(self.create_url, data)

        self.assertEqual(response.status_code, 200)
        self.assertFalse(BusinessUnit.objects.exists())
        editor = response.context['editor']
        self.assertEqual(editor.formsets['gallery_images'].total_form_count(), 1)
        self.assertFalse(editor.show_errors)

    def test_add_action_stops_at_max(self):
        rows = [{'id': '', 'title': f'Kartu {i}', 'description': 'x', 'ORDER': str(i + 1)} for i in range(6)]
        data = editor_data(BusinessUnitEditor, UNIT_FIELDS, sections={'more_about': rows})
        data['editor_action'] = 'add:more_about'
        response = self.client.post(self.create_url, data)

        self.assertEqual(response.context['editor'].formsets['more_about'].total_form_count(), 6)

    def test_unknown_or_bad_actions_are_reported(self):
        for action in ('add:nope', 'move:services:0:3', 'shuffle:services'):
            data = editor_data(BusinessUnitEditor, UNIT_FIELDS, sections={
                'services': [{'id': '', 'title': 'Roasting', 'ORDER': '1'}],
            })
            data['editor_action'] = action
            response = self.client.post(self.create_url, data)

            self.assertEqual(response.status_code, 200)
            self.assertIn("Aksi editor tidak valid.", flashed(response))
        self.assertFalse(BusinessUnit.objects.exists())


class BusinessUnitUpdateTests(TestCase):

    def setUp(self):
        cache.clear()
        self.staff = User.objects.create_user('staff', 'staff@example.com', 'password123', is_staff=True)
        self.client.force_login(self.staff)
        self.unit = BusinessUnit.objects.create(
            name='Kopi Nusantara',
            sort_order=1,
            services=json.dumps([
                {'id': 'service_a', 'title': 'Roasting'},
                {'id': 'service_b', 'title': 'Katering'},
            ]),
            company_stats=[{'label': 'Team Size', 'value': '25', 'icon': '👨‍💼'}],
            team_members=[{'id': 'member_1', 'name': 'Sari', 'role': 'COO', 'social_links': {'github': 'https://github.com/sari'}}],
        )
        self.url = reverse('business_units:staff_update', args=[self.unit.slug])
        self.fields = {**UNIT_FIELDS, 'slug': 'kopi-nusantara', 'years_in_business': '', 'team_size': '25'}

    def service_rows(self, **extra):
        rows = [
            {'id': 'service_a', 'title': 'Roasting', 'ORDER': '1'},
            {'id': 'service_b', 'title': 'Katering', 'ORDER': '2'},
        ]
        for index, values in extra.items():
            rows[int(index[1:])].update(values)
        return rows

    def test_form_is_prefilled_from_stored_shapes(self):
        response = self.client.get(self.url)
        editor = response.context['editor']

        self.assertEqual(editor.form['team_size'].value(), '25')
        self.assertEqual(editor.formsets['services'].initial_form_count(), 2)
        member_form = editor.formsets['team_members'].forms[0]
        self.assertEqual(member_form['social_links_github'].value(), 'https://github.com/sari')

    def test_move_action_reorders_without_saving(self):
        data = editor_data(BusinessUnitEditor, self.fields, sections={'services': self.service_rows()}, initial={'services': 2})
        data['editor_action'] = 'move:services:0:1'
        response = self.client.post(self.url, data)

        display = response.context['editor'].formsets['services'].display_forms
        self.assertEqual([form['title'].value() for form in display], ['Katering', 'Roasting'])
        self.unit.refresh_from_db()
        self.assertEqual(self.unit.service_titles, ['Roasting', 'Katering'])

    def test_reorder_and_delete_on_save(self):
        rows = self.service_rows(r0={'ORDER': '2'}, r1={'ORDER': '1'})
        data = editor_data(BusinessUnitEditor, self.fields, sections={'services': rows}, initial={'services': 2})
        response = self.client.post(self.url, data)
        self.assertRedirects(response, reverse('business_units:staff_list'), fetch_redirect_response=False)
        self.unit.refresh_from_db()
        self.assertEqual([s['id'] for s in self.unit.services_list], ['service_b', 'service_a'])

        rows = self.service_rows(r0={'DELETE': 'on'})
        data = editor_data(BusinessUnitEditor, self.fields, sections={'services': rows}, initial={'services': 2})
        self.client.post(self.url, data)
        self.unit.refresh_from_db()
        self.assertEqual(self.unit.service_titles, ['Katering'])

    def test_deleting_every_service_stores_blank_text(self):
        rows = self.service_rows(r0={'DELETE': 'on'}, r1={'DELETE': 'on'})
        data = editor_data(BusinessUnitEditor, self.fields, sections={'services': rows}, initial={'services': 2})
        self.client.post(self.url, data)

        self.unit.refresh_from_db()
        self.assertEqual(self.unit.services, '')
        self.assertEqual([(s['label'], s['value']) for s in self.unit.company_stats], [('Team Size', '25')])

    def test_delete(self):
        url = reverse('business_units:staff_delete', args=[self.unit.slug])
        response = self.client.post(url)
        self.assertRedirects(response, reverse('business_units:staff_list'), fetch_redirect_response=False)
        self.assertFalse(BusinessUnit.objects.exists())
        self.assertIn("Unit bisnis berhasil dihapus.", flashed(response))

    def test_staff_list_and_detail(self):
        BusinessUnit.objects.create(name='Unit Lama', is_active=False)
        response = self.client.get(reverse('business_units:staff_list'))
        self.assertEqual(len(response.context['business_units']), 2)

        response = self.client.get(reverse('business_units:staff_detail', args=[self.unit.slug]))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Katering')


class BusinessUnitServiceStaffTests(TestCase):

    def setUp(self):
        cache.clear()
        self.staff = User.objects.create_user('staff', 'staff@example.com', 'password123', is_staff=True)
        self.client.force_login(self.staff)
        self.unit = BusinessUnit.objects.create(name='Kopi Nusantara')
        self.other_unit = BusinessUnit.objects.create(name='Agro Mandiri')

    def service_fields(self, **overrides):
        fields = {
            'business_unit': str(self.unit.pk),
            'title': 'Konsultasi Kedai',
            'description': 'Membantu membuka kedai kopi.',
            'image': '',
            'price_range': 'Rp 5 juta',
            'duration': '2 minggu',
            'features': 'Survei lokasi\nDesain menu',
            'technologies': 'POS, Excel',
        }
        fields.update(overrides)
        return fields

    def test_create_with_process_steps(self):
        data = editor_data(BusinessUnitServiceEditor, self.service_fields(), sections={
            'process_steps': [
                {'step': 'Analisis', 'description': 'Kebutuhan', 'ORDER': '2'},
                {'step': 'Desain', 'description': '', 'ORDER': '1'},
            ],
        })
        response = self.client.post(reverse('business_units:staff_service_create'), data)

        self.assertRedirects(response, reverse('business_units:staff_service_list'), fetch_redirect_response=False)
        service = BusinessUnitService.objects.get()
        self.assertEqual(service.business_unit, self.unit)
        self.assertEqual(service.features, ['Survei lokasi', 'Desain menu'])
        self.assertEqual(service.technologies, ['POS', 'Excel'])
        self.assertEqual(service.process_steps, [
            {'step': 'Desain', 'description': '', 'order': 1},
            {'step': 'Analisis', 'description': 'Kebutuhan', 'order': 2},
        ])
        self.assertIn("Layanan berhasil ditambahkan.", flashed(response))

    def test_create_prefills_business_unit(self):
        response = self.client.get(reverse('business_units:staff_service_create'), {'business_unit': self.unit.pk})
        self.assertEqual(response.context['form'].initial['business_unit'], self.unit.pk)

    def test_update_keeps_inactive_parent_selectable(self):
        service = BusinessUnitService.objects.create(business_unit=self.unit, title='Konsultasi')
        self.unit.is_active = False
        self.unit.save()

        response = self.client.get(reverse('business_units:staff_service_update', args=[service.pk]))
        self.assertIn(self.unit, response.context['form'].fields['business_unit'].queryset)

        data = editor_data(BusinessUnitServiceEditor, self.service_fields(title='Konsultasi Baru'))
        response = self.client.post(reverse('business_units:staff_service_update', args=[service.pk]), data)
        service.refresh_from_db()
        self.assertEqual(service.title, 'Konsultasi Baru')
        self.assertIn("Layanan berhasil diperbarui.", flashed(response))

    def test_list_filters_and_sorts(self):
        BusinessUnitService.objects.create(business_unit=self.unit, title='Barista')
        BusinessUnitService.objects.create(business_unit=self.unit, title='Audit')
        BusinessUnitService.objects.create(business_unit=self.other_unit, title='Pupuk')
        url = reverse('business_units:staff_service_list')

        response = self.client.get(url, {'business_unit': self.unit.pk, 'sort_by': 'title', 'sort_direction': 'asc'})
        self.assertEqual([s.title for s in response.context['services']], ['Audit', 'Barista'])

        response = self.client.get(url, {'search': 'agro'})
        self.assertEqual([s.title for s in response.context['services']], ['Pupuk'])

        response = self.client.get(url, {'per_page': '1'})
        self.assertEqual(len(response.context['services']), 1)
        self.assertTrue(response.context['is_paginated'])

    def test_detail_and_delete(self):
        service = BusinessUnitService.objects.create(
            business_unit=self.unit, title='Konsultasi', process_steps=[{'step': 'Analisis', 'order': 1}]
        )
        response = self.client.get(reverse('business_units:staff_service_detail', args=[service.pk]))
        self.assertContains(response, 'Analisis')

        response = self.client.post(reverse('business_units:staff_service_delete', args=[service.pk]))
        self.assertRedirects(response, reverse('business_units:staff_service_list'), fetch_redirect_response=False)
        self.assertFalse(BusinessUnitService.objects.exists())
