"""
Investment dashboard endpoint tests, backed by a temporary data directory
"""
import io
import shutil
import tempfile

import openpyxl
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from rest_framework import status

from accounts.models import UserProfile
from accounts.testing import CapacityAPITestCase
from .store import EQUIPMENT, PRODUCTS, SCENARIOS, InvestmentDataStore
from .test_prioritization import EQUIPMENT as EQUIPMENT_ROWS

XLSX = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

PRODUCT_ROWS = [
    {'id': 1, 'name': 'Pentavalent', 'type': 'Bacterial', 'market_demand': 90, 'profit_margin': 60,
     'technical_feasibility': 70, 'competitive_position': 60, 'regulatory_complexity': 50},
    {'id': 2, 'name': 'BCG', 'type': 'Bacterial', 'market_demand': 50, 'profit_margin': 40,
     'technical_feasibility': 80, 'competitive_position': 70, 'regulatory_complexity': 20},
]

SCENARIO_DATA = {
    'conservative': {'name': 'Conservative', 'total_investment': 12, 'lines_included': [1, 3]},
    'aggressive': {'name': 'Aggressive', 'total_investment': 17.5, 'lines_included': [1, 2, 3]},
}


def workbook_upload(rows, name='data.xlsx'):
    wb = openpyxl.Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return SimpleUploadedFile(name, buffer.getvalue(), content_type=XLSX)


class InvestmentDashboardTests(CapacityAPITestCase):

    def setUp(self):
        data_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, data_dir, ignore_errors=True)
        settings_override = override_settings(INVESTMENT_DATA_DIR=data_dir)
        settings_override.enable()
        self.addCleanup(settings_override.disable)

        self.store = InvestmentDataStore(data_dir)
        self.store.save(EQUIPMENT, EQUIPMENT_ROWS)
        self.store.save(PRODUCTS, PRODUCT_ROWS)
        self.store.save(SCENARIOS, SCENARIO_DATA)

        self.facilitator = self.create_user(UserProfile.ROLE_FACILITATOR)
        self.participant = self.create_user()
        self.authenticate(self.participant)

    def test_equipment_filter(self):
        response = self.client.get('/api/investments/equipment/', {'filter': 'critical'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['equipment'][0]['name'], 'Filling')

    def test_unknown_equipment_filter(self):
        response = self.client.get('/api/investments/equipment/', {'filter': 'cheap'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_statistics(self):
        response = self.client.get('/api/investments/equipment/statistics/', {'filter': 'strategic'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 2)
        self.assertEqual(response.data['total_capex'], 12)
        self.assertEqual(response.data['gmp_gap'], 100)

    def test_missing_data_file_reads_as_empty(self):
        shutil.rmtree(self.store.data_dir)
        response = self.client.get('/api/investments/equipment/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['equipment'], [])

    def test_replace_equipment_requires_facilitator(self):
        payload = [{'name': 'New line', 'investment': 3, 'impact_score': 75}]
        response = self.client.put('/api/investments/equipment/', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.authenticate(self.facilitator)
        response = self.client.put('/api/investments/equipment/', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        saved = self.store.equipment()
        self.assertEqual(len(saved), 1)
        self.assertEqual(saved[0]['id'], 1)
        self.assertEqual(saved[0]['risk_level'], 'Medium')

    def test_replace_equipment_validates_rows(self):
        self.authenticate(self.facilitator)
        response = self.client.put(
            '/api/investments/equipment/', [{'name': 'Bad', 'investment': 3, 'impact_score': 140}], format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(len(self.store.equipment()), 3)

    def test_rankings_with_custom_weights(self):
        response = self.client.get('/api/investments/products/rankings/')
        self.assertEqual([p['name'] for p in response.data['products']], ['Pentavalent', 'BCG'])

        response = self.client.get('/api/investments/products/rankings/', {
            'market_demand': 0, 'profit_margin': 0, 'technical_feasibility': 50,
            'competitive_position': 0, 'regulatory_complexity': 50,
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p['name'] for p in response.data['products']], ['BCG', 'Pentavalent'])
        self.assertEqual(response.data['products'][0]['weighted_score'], 80)

    def test_rankings_reject_bad_weight(self):
        response = self.client.get('/api/investments/products/rankings/', {'market_demand': 'lots'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_weight_change_is_normalized(self):
        response = self.client.post('/api/investments/products/weights/', {
            'weights': {'market_demand': 40, 'profit_margin': 20, 'technical_feasibility': 20,
                        'competitive_position': 20, 'regulatory_complexity': 20},
            'changed': 'market_demand',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['weights']['market_demand'], 40)
        self.assertEqual(response.data['weights']['profit_margin'], 15)
        self.assertEqual(len(response.data['products']), 2)

    def test_weight_reset(self):
        response = self.client.post('/api/investments/products/weights/', {'reset': True}, format='json')
        self.assertEqual(set(response.data['weights'].values()), {20})

    def test_scenario_detail_includes_lines(self):
        response = self.client.get('/api/investments/scenarios/conservative/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([line['name'] for line in response.data['included_lines']], ['Filling', 'QC lab'])

        response = self.client.get('/api/investments/scenarios/')
        self.assertEqual({s['key'] for s in response.data['scenarios']}, {'conservative', 'aggressive'})

    def test_unknown_scenario(self):
        response = self.client.get('/api/investments/scenarios/reckless/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_import_equipment_sheet(self):
        upload = workbook_upload([
            ['Name', 'Investment', 'impactScore', 'Priority', 'GMP Compliance'],
            ['Bioreactor', 8.5, 88, 'Critical', None],
            ['Autoclave', '1.2', 'n/a', None, 90],
            ['Chromatography', 'nan', 'inf', None, '-inf'],
            [None, None, None, None, None],
        ])
        self.authenticate(self.facilitator)
        response = self.client.post('/api/investments/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['type'], 'equipment')
        self.assertEqual(response.data['count'], 3)

        saved = self.store.equipment()
        self.assertEqual([line['id'] for line in saved], [1, 2, 3])
        self.assertEqual(saved[0]['gmp_compliance'], 70)
        self.assertEqual(saved[0]['priority'], 'Critical')
        self.assertEqual(saved[1]['investment'], 1.2)
        self.assertEqual(saved[1]['impact_score'], 0)
        self.assertEqual(saved[1]['priority'], 'Medium')
        self.assertEqual(saved[1]['roi_timeline'], 4.0)
        self.assertEqual(saved[2]['investment'], 0)
        self.assertEqual(saved[2]['impact_score'], 0)
        self.assertEqual(saved[2]['gmp_compliance'], 70)

    def test_import_product_sheet(self):
        upload = workbook_upload([
            ['name', 'marketDemand', 'profitMargin', 'type'],
            ['Rabies', 75, 80, 'Viral'],
        ])
        self.authenticate(self.facilitator)
        response = self.client.post('/api/investments/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.data['type'], 'products')

        product = self.store.products()[0]
        self.assertEqual(product['market_demand'], 75)
        self.assertEqual(product['technical_feasibility'], 50)
        self.assertEqual(product['estimated_investment'], '0M')
        self.assertEqual(product['current_production'], 'N/A')

    def test_import_unrecognised_sheet(self):
        upload = workbook_upload([['Colour', 'Size'], ['Red', 'L']])
        self.authenticate(self.facilitator)
        response = self.client.post('/api/investments/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('Unable to determine data format', response.data['error']['message'])

    def test_import_not_a_workbook(self):
        upload = SimpleUploadedFile('data.xlsx', b'plain text', content_type=XLSX)
        self.authenticate(self.facilitator)
        response = self.client.post('/api/investments/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_participant_cannot_import(self):
        upload = workbook_upload([['name', 'investment', 'impact_score'], ['Line', 1, 50]])
        response = self.client.post('/api/investments/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_export_workbook(self):
        response = self.client.get('/api/investments/export/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], XLSX)
        self.assertIn('NVI_Investment_Dashboard_', response['Content-Disposition'])

        wb = openpyxl.load_workbook(io.BytesIO(response.content))
        self.assertEqual(wb.sheetnames, ['Equipment', 'Products', 'Scenarios'])
        self.assertEqual(wb['Equipment'].max_row, 4)
        self.assertEqual(wb['Scenarios']['A2'].value, 'Conservative')
