# app/utils/terms.py
"""
Predefined terms & conditions a shop can print on job cards and invoices
"""

PREDEFINED_TERMS = [
    {'id': 'warranty_7', 'label': '7 days service warranty on repairs'},
    {'id': 'warranty_15', 'label': '15 days service warranty on repairs'},
    {'id': 'warranty_30', 'label': '30 days service warranty on repairs'},
    {'id': 'warranty_90', 'label': '90 days warranty on replaced parts'},
    {'id': 'no_physical_damage', 'label': 'Warranty void if physical or water damage occurs'},
    {'id': 'no_refund', 'label': 'No refund after service completion'},
    {'id': 'no_responsibility_data', 'label': 'Not responsible for data loss during repair'},
    {'id': 'backup_advised', 'label': 'Customer advised to backup data before service'},
    {'id': 'collect_7_days', 'label': 'Device must be collected within 7 days of completion'},
    {'id': 'collect_15_days', 'label': 'Device must be collected within 15 days of completion'},
    {'id': 'storage_charges', 'label': 'Storage charges may apply for uncollected devices after 15 days'},
    {'id': 'no_original_parts', 'label': 'Original parts may not be available; compatible parts may be used'},
    {'id': 'advance_required', 'label': 'Advance payment required before starting repair'},
    {'id': 'full_payment', 'label': 'Full payment required before device handover'},
    {'id': 'estimate_subject_change', 'label': 'Estimate subject to change upon inspection'},
    {'id': 'customer_consent', 'label': 'Customer consent required for additional repairs'},
    {'id': 'screen_replacement', 'label': 'Screen replacement may affect touch ID/Face ID functionality'},
    {'id': 'software_issues', 'label': 'Software issues may recur and are not covered under service warranty'},
    {'id': 'locked_device', 'label': 'We are not responsible for unlocking locked devices (iCloud/FRP)'},
    {'id': 'receipt_mandatory', 'label': 'Original receipt mandatory for warranty claims'},
]

TERM_LABELS = {term['id']: term['label'] for term in PREDEFINED_TERMS}


def is_known_term(term_id):
    return term_id in TERM_LABELS
