# ============================================
# execution/serializers/ledger.py
# ============================================
from rest_framework import serializers
from execution.models import LedgerEntry


class LedgerEntryOutputSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source='entry_type', read_only=True)

    class Meta:
        model = LedgerEntry
        fields = ['id', 'workspace_id', 'sprint_id', 'type', 'hash', 'timestamp', 'payload_summary']
