# inventory/management/commands/reconcile_inventory.py

from __future__ import annotations

from django.core.management.base import BaseCommand

from companies.models import Company
from inventory.services.reconciliation import reconcile_inventory


class Command(BaseCommand):
    help = "Compare current inventory with the replayed transaction log (optionally fix drift)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--company",
            dest="company",
            help="Company id (optional; default: all companies)",
        )
        parser.add_argument(
            "--fix",
            action="store_true",
            help="Rewrite drifted inventory records from the transaction log.",
        )
        parser.add_argument(
            "--strict",
            action="store_true",
            help="Fail (non-zero exit) if unfixed drift remains.",
        )

    def handle(self, *args, **options):
        strict = bool(options.get("strict"))
        fix = bool(options.get("fix"))

        companies = Company.objects.order_by("name")
        if options.get("company"):
            companies = companies.filter(pk=options["company"])
            if not companies.exists():
                self.stderr.write(self.style.ERROR(f"Company not found: {options['company']}"))
                return self._exit(strict)

        self.stdout.write(self.style.MIGRATE_HEADING("Inventory Reconciliation"))

        errors = 0

        for company in companies:
            self.stdout.write("")
            self.stdout.write(f"Company: {company}")

            report = reconcile_inventory(company=company, fix=fix)

            if not report["drift"]:
                self.stdout.write(
                    self.style.SUCCESS(f"[OK] {report['checked']} inventory record(s) match the log")
                )
                continue

            for row in report["drift"][:10]:
                self.stderr.write(
                    f"  product={row['product_id']} warehouse={row['warehouse_id']} "
                    f"recorded={row['recorded']} expected={row['expected']}"
                )

            if fix:
                self.stdout.write(
                    self.style.WARNING(f"[FIXED] {report['fixed']} inventory record(s) rewritten")
                )
            else:
                errors += len(report["drift"])
                self.stderr.write(
                    self.style.ERROR(f"[FAIL] Inventory drift: {len(report['drift'])}")
                )

        self.stdout.write("")
        if errors == 0:
            self.stdout.write(self.style.SUCCESS("RECONCILIATION PASSED"))
        else:
            self.stderr.write(self.style.ERROR(f"RECONCILIATION FOUND ISSUES: {errors} problem(s)"))

        return self._exit(strict and errors > 0)

    def _exit(self, fail: bool):
        if fail:
            raise SystemExit(1)
        return None
