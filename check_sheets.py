#!/usr/bin/env python3
"""
Connection check for the responses spreadsheet.
Prints every tab, the primary tab's headers, its row count and the last row.
"""
import sys

print("=" * 60)
print("🔌 Dev Catalyst Recruitment - Sheet connection check")
print("=" * 60)

try:
    from recruitment.config import get_settings
    from recruitment.errors import IntakeError
    from recruitment.sheets import open_store, primary_worksheet
except ImportError as e:
    print(f"✗ Cannot import modules: {e}")
    print("  Install the project first: pip install -e .")
    sys.exit(1)

try:
    settings = get_settings()
    settings.require_sheet_credentials()
    store = open_store(settings)

    print("✓ Connected")
    print("\nTABS:")
    for tab in store.worksheets():
        print(f"  - {tab.title} ({tab.col_count} columns)")

    sheet = primary_worksheet(store)
    print(f"\nHEADERS ({sheet.title}):")
    print(sheet.get_header())

    rows = sheet.get_records()
    print(f"\nFound {len(rows)} rows.")
    if rows:
        last = rows[-1]
        print("\nLast Row Dump:")
        for label in ("Full Name", "Roll Number", "Branch", "Section", "Email", "Selected Track"):
            print(f"  {label}: {last.get(label, '')}")
except IntakeError as e:
    print(f"\n❌ {e.message}")
    print("\nTroubleshooting:")
    print("1. Check GOOGLE_SERVICE_ACCOUNT_EMAIL, GOOGLE_PRIVATE_KEY and GOOGLE_SHEET_ID in .env")
    print("2. Share the spreadsheet with the service account email")
    sys.exit(1)

print("=" * 60)
