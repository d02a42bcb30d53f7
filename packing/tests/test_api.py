import unittest
from fastapi.testclient import TestClient
from packing.api.api_run import app
from packing.api.dependencies import get_store
from packing.infra.Store import JsonStore


class TestPackingAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        # Fresh in-memory store per test, nothing touches the data directory
        self.store = JsonStore()
        app.dependency_overrides[get_store] = lambda: self.store

    def tearDown(self):
        app.dependency_overrides.clear()

    def _trip(self, name="Rome"):
        resp = self.client.post('/api/trips', json={'name': name})
        self.assertEqual(resp.status_code, 201)
        return resp.json()

    def _item(self, trip_id, **fields):
        body = {'name': 'Socks', 'category': 'Clothes', 'location': 'Bedroom'}
        body.update(fields)
        resp = self.client.post(f'/api/trips/{trip_id}/items', json=body)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def test_trip_lifecycle(self):
        trip = self._trip('  Rome ')
        self.assertEqual(trip['name'], 'Rome')
        self.assertEqual(trip['percent'], 0)
        listed = self.client.get('/api/trips').json()
        self.assertEqual([t['id'] for t in listed], [trip['id']])

        renamed = self.client.put(f"/api/trips/{trip['id']}", json={'name': 'Naples'})
        self.assertEqual(renamed.json()['name'], 'Naples')

        self.assertEqual(self.client.delete(f"/api/trips/{trip['id']}").status_code, 204)
        self.assertEqual(self.client.get(f"/api/trips/{trip['id']}").status_code, 404)

    def test_blank_names_are_rejected(self):
        self.assertEqual(self.client.post('/api/trips', json={'name': '   '}).status_code, 400)
        trip = self._trip()
        resp = self.client.post(f"/api/trips/{trip['id']}/items",
                                json={'name': 'Socks', 'category': ' ', 'location': 'Bedroom'})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.post('/api/vocabulary/location', json={'name': ''}).status_code, 400)

    def test_toggle_and_statistics(self):
        trip = self._trip()
        item = self._item(trip['id'])
        self._item(trip['id'], name='Shirt')
        toggled = self.client.post(f"/api/items/{item['id']}/toggle").json()
        self.assertTrue(toggled['is_packed'])
        stats = self.client.get(f"/api/trips/{trip['id']}/statistics").json()
        self.assertEqual((stats['packed_count'], stats['total_count'], stats['percent']), (1, 2, 50))

        reset = self.client.post(f"/api/trips/{trip['id']}/reset").json()
        self.assertEqual(reset['packed_count'], 0)

    def test_sections_follow_vocabulary_order(self):
        for name in ('Bathroom', 'Bedroom'):
            self.client.post('/api/vocabulary/location', json={'name': name})
        trip = self._trip()
        self._item(trip['id'], name='Socks', location='Bedroom')
        self._item(trip['id'], name='Soap', category='Toiletries', location='Bathroom', group='Morning')
        self._item(trip['id'], name='Drill', category='Tools', location='Garage')

        data = self.client.get(f"/api/trips/{trip['id']}/sections", params={'mode': 'location'}).json()
        self.assertEqual([s['key'] for s in data['sections']], ['Bathroom', 'Bedroom', 'Garage'])

        nested = self.client.get(f"/api/trips/{trip['id']}/sections",
                                 params={'mode': 'nested', 'location': 'Bathroom'}).json()
        self.assertEqual(nested['sections'][0]['key'], 'Toiletries')
        self.assertEqual(nested['sections'][0]['sections'][0]['items'][0]['name'], 'Soap')

        ungrouped = self.client.get(f"/api/trips/{trip['id']}/sections",
                                    params={'mode': 'flat', 'ungrouped': 'true'}).json()
        self.assertEqual(sorted(i['name'] for i in ungrouped['sections'][0]['items']), ['Drill', 'Socks'])

        bad = self.client.get(f"/api/trips/{trip['id']}/sections", params={'mode': 'colour'})
        self.assertEqual(bad.status_code, 400)

    def test_rename_vocabulary_updates_items(self):
        entry = self.client.post('/api/vocabulary/location', json={'name': 'Bedroom'}).json()
        trip = self._trip()
        item = self._item(trip['id'], location='bedroom')
        resp = self.client.put(f"/api/vocabulary/location/{entry['id']}", json={'name': 'Room 1'})
        self.assertEqual(resp.status_code, 200)
        detail = self.client.get(f"/api/trips/{trip['id']}").json()
        self.assertEqual(detail['items'][0]['id'], item['id'])
        self.assertEqual(detail['items'][0]['location'], 'Room 1')

    def test_vocabulary_remove_and_move(self):
        ids = [self.client.post('/api/vocabulary/group', json={'name': n}).json()['id']
               for n in ('Night before', 'Morning', 'Last minute')]
        moved = self.client.post(f"/api/vocabulary/group/{ids[2]}/move", json={'position': 0}).json()
        self.assertEqual([e['name'] for e in moved], ['Last minute', 'Night before', 'Morning'])

        self.assertEqual(self.client.delete(f"/api/vocabulary/group/{ids[0]}").status_code, 204)
        self.assertEqual(self.client.delete(f"/api/vocabulary/group/{ids[0]}").status_code, 404)
        listing = self.client.get('/api/vocabulary/group').json()
        self.assertEqual(listing['title'], 'Pack times')
        self.assertEqual([e['name'] for e in listing['entries']], ['Last minute', 'Morning'])

    def test_inline_add_reuses_existing_entry(self):
        first = self.client.post('/api/vocabulary/category/ensure', json={'name': 'Shoes'})
        self.assertEqual(first.status_code, 200)
        again = self.client.post('/api/vocabulary/category/ensure', json={'name': ' shoes '}).json()
        self.assertEqual(again['id'], first.json()['id'])
        names = [e['name'] for e in self.client.get('/api/vocabulary/category').json()['entries']]
        self.assertEqual(names, ['Shoes'])

    def test_import_with_malformed_records(self):
        resp = self.client.post('/api/import', json={'trips': ['oops'], 'vocabulary': {'group': [1]}})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['skipped'], 2)
        self.assertEqual(self.client.get('/api/trips').json(), [])

    def test_unknown_vocabulary_kind(self):
        self.assertEqual(self.client.get('/api/vocabulary/colour').status_code, 404)

    def test_item_update_duplicate_delete(self):
        trip = self._trip()
        item = self._item(trip['id'])
        updated = self.client.put(f"/api/items/{item['id']}", json={'container': ' Bag '}).json()
        self.assertEqual(updated['container'], 'Bag')
        self.assertEqual(updated['name'], 'Socks')
        copy = self.client.post(f"/api/items/{item['id']}/duplicate").json()
        self.assertEqual(copy['name'], 'Copy of Socks')
        self.assertEqual(self.client.delete(f"/api/items/{item['id']}").status_code, 204)
        self.assertEqual(self.client.post(f"/api/items/{item['id']}/toggle").status_code, 404)

    def test_duplicate_and_clone_trip(self):
        trip = self._trip()
        self._item(trip['id'])
        copy = self.client.post(f"/api/trips/{trip['id']}/duplicate").json()
        self.assertEqual(copy['name'], 'Copy of Rome')
        self.assertEqual(copy['total_count'], 1)
        clone = self.client.post('/api/trips', json={'name': 'Oslo', 'clone_from': trip['id']}).json()
        self.assertEqual(clone['total_count'], 1)

    def test_pdf_and_csv(self):
        trip = self._trip()
        self._item(trip['id'])
        pdf = self.client.get(f"/api/trips/{trip['id']}/pdf")
        self.assertEqual(pdf.status_code, 200)
        self.assertTrue(pdf.content.startswith(b'%PDF'))
        csv_resp = self.client.get(f"/api/trips/{trip['id']}/export.csv")
        self.assertIn('Socks', csv_resp.text)

    def test_export_import_and_stats(self):
        trip = self._trip()
        self._item(trip['id'])
        exported = self.client.get('/api/export').json()
        summary = self.client.post('/api/import', json=exported).json()
        self.assertEqual(summary['trips'], 1)
        self.assertEqual(self.client.get('/api/stats').json()['trips'], 2)

    def test_backups_need_a_file_store(self):
        self.assertEqual(self.client.get('/api/backups').status_code, 400)


if __name__ == '__main__':
    unittest.main()
