#!/usr/bin/env python3
"""
SME Compliance Calendar - Entry Point

Finds the compliance obligations that apply to a business and builds
its 12-month filing calendar, cost estimate and risk assessment.

Usage:
    python main.py obligations
    python main.py match --type Service --state Maharashtra --turnover 40L-1Cr --employees 20-49 --msme
    python main.py calendar --profile profile.json --month "January 2027"
    python main.py report --profile profile.json --export-json report.json
"""

from compliance_calendar.cli import main

if __name__ == "__main__":
    main()
