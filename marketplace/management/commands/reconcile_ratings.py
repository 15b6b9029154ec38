import logging

from django.core.management.base import BaseCommand, CommandError

from infrastructure.container import container
from marketplace.models import Gig


logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Recompute gig and seller rating aggregates from their reviews."

    def add_arguments(self, parser):
        target = parser.add_mutually_exclusive_group()
        target.add_argument("--gig", dest="gig_id", help="Repair a single gig by id")
        target.add_argument("--all", action="store_true", help="Recompute every gig, not only inconsistent ones")
        parser.add_argument("--dry-run", action="store_true", help="Only report inconsistent gigs and sellers")

    def handle(self, *args, **options):
        service = container.reputation_service()

        if options["gig_id"]:
            gig_ids = [options["gig_id"]]
        elif options["all"]:
            gig_ids = [str(gig_id) for gig_id in Gig.objects.order_by("created_at").values_list("id", flat=True)]
        else:
            result = service.find_inconsistent_gigs()
            if not result.ok:
                raise CommandError(result.error_detail)
            gig_ids = result.value
            self.stdout.write(f"Found {len(gig_ids)} inconsistent gigs")

        if options["dry_run"]:
            for gig_id in gig_ids:
                self.stdout.write(gig_id)
            if not options["gig_id"]:
                for seller_id in self._inconsistent_sellers(service):
                    self.stdout.write(f"seller {seller_id}")
            return

        repaired = 0
        for gig_id in gig_ids:
            result = service.reconcile_gig(gig_id)
            if not result.ok:
                if options["gig_id"]:
                    raise CommandError(f"{gig_id}: {result.error_detail}")
                self.stdout.write(self.style.WARNING(f"Skipped {gig_id}: {result.error_detail}"))
                continue
            if result.value["repaired"]:
                repaired += 1
                self.stdout.write(
                    self.style.SUCCESS(
                        f"Repaired {gig_id}: count={result.value['reviews_count']} rating={result.value['rating']:.2f}"
                    )
                )

        self.stdout.write(self.style.SUCCESS(f"Rating reconciliation complete. Repaired {repaired} gigs."))
        if options["gig_id"]:
            return

        # Gig repairs refresh their sellers; what is left here lost reviews some other way
        repaired_sellers = 0
        for seller_id in self._inconsistent_sellers(service):
            result = service.reconcile_seller(seller_id)
            if not result.ok:
                self.stdout.write(self.style.WARNING(f"Skipped seller {seller_id}: {result.error_detail}"))
                continue
            repaired_sellers += 1
            self.stdout.write(
                self.style.SUCCESS(
                    f"Repaired seller {seller_id}: count={result.value['rating_count']} "
                    f"average={result.value['rating_average']:.2f}"
                )
            )
        self.stdout.write(self.style.SUCCESS(f"Repaired {repaired_sellers} seller profiles."))

    def _inconsistent_sellers(self, service):
        result = service.find_inconsistent_sellers()
        if not result.ok:
            raise CommandError(result.error_detail)
        return result.value
