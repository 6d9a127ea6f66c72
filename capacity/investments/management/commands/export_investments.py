"""
Write the investment dashboard data to an Excel workbook.

    python manage.py export_investments --output dashboard.xlsx
"""
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from investments.excel import build_workbook
from investments.store import InvestmentDataStore


class Command(BaseCommand):
    help = 'Export equipment, products and scenarios to an .xlsx workbook'

    def add_arguments(self, parser):
        parser.add_argument('--output', help='Target file (default NVI_Investment_Dashboard_<timestamp>.xlsx)')
        parser.add_argument('--data-dir', help='Read JSON files from this directory instead of INVESTMENT_DATA_DIR')

    def handle(self, *args, **options):
        store = InvestmentDataStore(options.get('data_dir'))
        equipment = store.equipment()
        products = store.products()
        scenarios = store.scenarios()
        if not (equipment or products or scenarios):
            raise CommandError(f'No investment data found in {store.data_dir}')

        output = options.get('output') or (
            f"NVI_Investment_Dashboard_{timezone.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
        )
        with open(output, 'wb') as fh:
            fh.write(build_workbook(equipment, products, scenarios))

        self.stdout.write(self.style.SUCCESS(
            f'✓ Exported {len(equipment)} equipment lines, {len(products)} products and '
            f'{len(scenarios)} scenarios to {output}'
        ))
