# accounting/admin.py

from django.contrib import admin

from accounting.models import Account, JournalEntry, JournalLineItem

# ============================================================
# ACCOUNT
# ============================================================


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "name",
        "account_type",
        "subtype",
        "company",
        "current_balance",
        "is_active",
    )
    list_filter = ("account_type", "is_active", "company")
    search_fields = ("code", "name", "subtype")
    ordering = ("company", "code")
    # Balances move only through posting.
    readonly_fields = ("opening_balance", "current_balance", "created_at", "updated_at")

    fieldsets = (
        (
            "Account Identity",
            {
                "fields": ("company", "code", "name", "account_type", "subtype", "parent"),
            },
        ),
        (
            "Balances",
            {
                "fields": ("opening_balance", "current_balance"),
            },
        ),
        (
            "Status",
            {
                "fields": ("is_active", "description"),
            },
        ),
        (
            "System Fields",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )

    def has_delete_permission(self, request, obj=None):
        return False


# ============================================================
# JOURNAL ENTRY (READ-ONLY)
# ============================================================


class JournalLineItemInline(admin.TabularInline):
    model = JournalLineItem
    extra = 0
    can_delete = False
    fields = ("line_number", "account", "side", "amount", "description")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(JournalEntry)
class JournalEntryAdmin(admin.ModelAdmin):
    list_display = (
        "entry_number",
        "entry_date",
        "company",
        "description",
        "total_debit",
        "total_credit",
        "status",
        "posted_at",
    )
    list_filter = ("status", "company", "reference_type")
    search_fields = ("entry_number", "description", "reference_id")
    ordering = ("-entry_date", "-created_at")
    inlines = [JournalLineItemInline]

    readonly_fields = (
        "company",
        "entry_number",
        "entry_date",
        "reference_type",
        "reference_id",
        "description",
        "total_debit",
        "total_credit",
        "status",
        "created_by",
        "posted_at",
        "reversed_by",
        "created_at",
        "updated_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# ============================================================
# JOURNAL LINE ITEM (STRICTLY IMMUTABLE)
# ============================================================


@admin.register(JournalLineItem)
class JournalLineItemAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "journal_entry",
        "line_number",
        "account",
        "side",
        "amount",
        "created_at",
    )
    list_filter = ("side",)
    search_fields = ("journal_entry__entry_number", "account__code")
    ordering = ("journal_entry", "line_number")

    readonly_fields = (
        "journal_entry",
        "line_number",
        "account",
        "side",
        "amount",
        "description",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
