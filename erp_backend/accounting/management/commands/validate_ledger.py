# accounting/management/commands/validate_ledger.py

from __future__ import annotations

from django.core.management.base import BaseCommand
from django.db.models import Sum

from accounting.models import JournalLineItem
from accounting.services.balance_service import BOOKED_STATUSES, verify_account_balances
from companies.models import Company


class Command(BaseCommand):
    help = "Validate ledger integrity (global debits == credits + per-account balance drift)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--company",
            dest="company",
            help="Company id (optional; default: all companies)",
        )
        parser.add_argument(
            "--strict",
            action="store_true",
            help="Fail (non-zero exit) if any error is found.",
        )

    def handle(self, *args, **options):
        strict = bool(options.get("strict"))

        companies = Company.objects.order_by("name")
        if options.get("company"):
            companies = companies.filter(pk=options["company"])
            if not companies.exists():
                self.stderr.write(self.style.ERROR(f"Company not found: {options['company']}"))
                return self._exit(strict)

        self.stdout.write(self.style.MIGRATE_HEADING("Ledger Validation"))

        errors = 0

        for company in companies:
            self.stdout.write("")
            self.stdout.write(f"Company: {company}")

            # -----------------------------
            # 1) Booked lines balance
            # -----------------------------
            lines = JournalLineItem.objects.filter(
                journal_entry__company=company,
                journal_entry__status__in=BOOKED_STATUSES,
            )
            debits = (
                lines.filter(side=JournalLineItem.DEBIT).aggregate(total=Sum("amount")).get("total")
                or 0
            )
            credits = (
                lines.filter(side=JournalLineItem.CREDIT).aggregate(total=Sum("amount")).get("total")
                or 0
            )

            if debits != credits:
                errors += 1
                self.stderr.write(
                    self.style.ERROR(f"[FAIL] Ledger not balanced: debits={debits} credits={credits}")
                )
            else:
                self.stdout.write(
                    self.style.SUCCESS(f"[OK] Ledger balanced: debits={debits} credits={credits}")
                )

            # -----------------------------
            # 2) Running balances vs ledger
            # -----------------------------
            report = verify_account_balances(company=company)
            if report["ok"]:
                self.stdout.write(
                    self.style.SUCCESS(f"[OK] {report['checked']} account balance(s) match the ledger")
                )
            else:
                errors += len(report["drift"])
                self.stderr.write(
                    self.style.ERROR(f"[FAIL] Account balance drift: {len(report['drift'])}")
                )
                for row in report["drift"][:10]:
                    self.stderr.write(
                        f"  {row['account_code']} current={row['current_balance']} "
                        f"ledger={row['ledger_balance']} diff={row['difference']}"
                    )

        self.stdout.write("")
        if errors == 0:
            self.stdout.write(self.style.SUCCESS("VALIDATION PASSED"))
        else:
            self.stderr.write(self.style.ERROR(f"VALIDATION FOUND ISSUES: {errors} problem(s)"))

        return self._exit(strict and errors > 0)

    def _exit(self, fail: bool):
        if fail:
            raise SystemExit(1)
        return None
