import json
from datetime import date

from django.core.management.base import BaseCommand, CommandError

from apps.indicators.domain.exceptions import SbifError
from apps.indicators.domain.models import IndicatorCode
from apps.indicators.domain.services import IndicatorService
from apps.indicators.infrastructure.providers.registry import get_indicator_client


class Command(BaseCommand):
    help = 'Fetch an indicator value (uf, utm, dolar, euro, ipc) or an institution profile from the SBIF API'

    def add_arguments(self, parser):
        parser.add_argument(
            'indicator',
            nargs='?',
            type=str,
            help='Indicator name: uf, utm, dolar, euro or ipc'
        )
        parser.add_argument(
            '--date',
            dest='query_date',
            type=str,
            help='Date in YYYY-MM-DD format (defaults to today)'
        )
        parser.add_argument(
            '--institution',
            dest='institution_code',
            type=str,
            help='Institution code; fetches the institution profile instead of an indicator'
        )

    def handle(self, **options):
        indicator = options['indicator']
        institution_code = options['institution_code']
        query_date_str = options['query_date']

        if not indicator and not institution_code:
            raise CommandError('Give an indicator name or --institution CODE')

        query_date = None
        if query_date_str:
            try:
                query_date = date.fromisoformat(query_date_str)
            except ValueError:
                raise CommandError('Invalid date format. Use YYYY-MM-DD')

        service = IndicatorService(get_indicator_client())

        try:
            if institution_code:
                result = service.get_institution_profile(institution_code, query_date)
                self.stdout.write(json.dumps(result.profile, ensure_ascii=False, indent=2))
                return

            try:
                code = IndicatorCode.from_name(indicator)
            except ValueError as e:
                raise CommandError(str(e))

            result = service.get_indicator_value(code, query_date)
        except SbifError as e:
            raise CommandError(f"SBIF request failed: {e}")

        self.stdout.write(
            self.style.SUCCESS(
                f"{result.indicator} {result.query_date.isoformat()}: {result.value}"
            )
        )
