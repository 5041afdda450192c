"""
Spreadsheet exports
"""

import io
from datetime import date
from typing import Dict, List

import pandas as pd
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from realty_crm.services.payable import PayableEntry
from realty_crm.utils import format_date

LEDGER_COLUMNS = ['Lead ID', 'Deal Date', 'Property', 'Partner', 'Partner Role', 'Deal Value',
                  'Earning Rule', 'Earning Amount', 'Status']


class ReportService:
    """Service for generating and exporting reports"""

    def ledger_rows(self, entries: List[PayableEntry]) -> List[Dict]:
        rows = []
        for entry in entries:
            rows.append({
                'Lead ID': entry.lead_id,
                'Deal Date': format_date(entry.deal_date) if entry.deal_date else '',
                'Property': entry.property.get('catalog_title'),
                'Partner': entry.partner.get('name'),
                'Partner Role': entry.partner.get('role'),
                'Deal Value': float(entry.deal_value),
                'Earning Rule': entry.earning_rule.describe(),
                'Earning Amount': float(entry.earning_amount),
                'Status': entry.status,
            })
        return rows

    def export_payable_ledger_excel(self, entries: List[PayableEntry]) -> bytes:
        """
        Render the payable ledger to an Excel file (single sheet) with a totals row.
        """
        rows = self.ledger_rows(entries)
        df = pd.DataFrame(rows, columns=LEDGER_COLUMNS)
        if rows:
            totals = {column: '' for column in LEDGER_COLUMNS}
            totals['Lead ID'] = 'Total'
            totals['Earning Amount'] = round(float(df['Earning Amount'].sum()), 2)
            df = pd.concat([df, pd.DataFrame([totals])], ignore_index=True)

        buf = io.BytesIO()
        with pd.ExcelWriter(buf, engine="openpyxl") as writer:
            sheet_name = f"Payables {date.today().strftime('%b %Y')}"
            df.to_excel(writer, index=False, sheet_name=sheet_name)

            ws = writer.book[sheet_name]

            header_fill = PatternFill(start_color="305496", end_color="305496", fill_type="solid")
            header_font = Font(color="FFFFFF", bold=True)
            center = Alignment(horizontal="center", vertical="center")

            for c in ws[1]:
                c.fill = header_fill
                c.font = header_font
                c.alignment = center

            widths = [10, 14, 30, 22, 16, 16, 34, 16, 10]
            for i, w in enumerate(widths, start=1):
                ws.column_dimensions[get_column_letter(i)].width = w

            # Deal Value and Earning Amount
            for col in ("F", "H"):
                for cell in ws[col][1:]:
                    if isinstance(cell.value, (int, float)):
                        cell.number_format = '₹#,##0.00'

            if rows:
                for c in ws[ws.max_row]:
                    c.font = Font(bold=True)

        buf.seek(0)
        return buf.getvalue()
