from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse
from typing import List
from datetime import date
from core.settings import settings
from dto.response_dto.report import MonthlyStat
from services.reports import ReportService
import io
import pandas as pd
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/reports", tags=["Reports"])


def _generate_excel_data(stats: List[MonthlyStat]) -> bytes:
    """Monthly report workbook: a Summary sheet of totals and a Monthly sheet per month."""
    monthly_df = pd.DataFrame([
        {
            'Month': f"{stat.month} {stat.year}",
            'Revenue': stat.revenue,
            'Profit': stat.profit,
            'Trainings': stat.trainings,
            'Quotations': stat.quotations,
            'Leads': stat.leads,
        }
        for stat in stats
    ])

    symbol = settings.CURRENCY_SYMBOL
    summary_df = pd.DataFrame({
        'Metric': [
            'Total Revenue',
            'Total Profit',
            'Trainings',
            'Quotations',
            'Leads',
        ],
        'Value': [
            f"{symbol}{monthly_df['Revenue'].sum():,.2f}",
            f"{symbol}{monthly_df['Profit'].sum():,.2f}",
            int(monthly_df['Trainings'].sum()),
            int(monthly_df['Quotations'].sum()),
            int(monthly_df['Leads'].sum()),
        ]
    })

    output = io.BytesIO()

    with pd.ExcelWriter(output, engine='xlsxwriter') as writer:
        summary_df.to_excel(writer, sheet_name='Summary', index=False)
        monthly_df.to_excel(writer, sheet_name='Monthly', index=False)

        workbook = writer.book
        summary_sheet = writer.sheets['Summary']
        monthly_sheet = writer.sheets['Monthly']

        header_format = workbook.add_format({
            'bold': True,
            'bg_color': '#2E75B6',
            'font_color': 'white',
            'border': 1,
            'align': 'center',
            'valign': 'vcenter'
        })
        currency_format = workbook.add_format({
            'num_format': f'{symbol}#,##0.00',
            'border': 1
        })
        count_format = workbook.add_format({
            'num_format': '0',
            'border': 1
        })

        summary_sheet.set_column('A:A', 25)
        summary_sheet.set_column('B:B', 25)
        for col_num, value in enumerate(summary_df.columns.values):
            summary_sheet.write(0, col_num, value, header_format)

        monthly_sheet.set_column('A:A', 14)
        monthly_sheet.set_column('B:C', 18, currency_format)
        monthly_sheet.set_column('D:F', 12, count_format)
        for col_num, value in enumerate(monthly_df.columns.values):
            monthly_sheet.write(0, col_num, value, header_format)
        monthly_sheet.set_row(0, 20)

    excel_bytes = output.getvalue()
    output.close()

    logger.info(f"Monthly report workbook generated ({len(excel_bytes)} bytes)")
    return excel_bytes


@router.get("/monthly", response_model=List[MonthlyStat], summary="Monthly Statistics")
async def monthly_report():
    """
    Revenue, profit and activity for the last six calendar months (oldest first).

    Revenue and profit come from trainings created in the month:
    days × (trainer + lab + platform) per-day prices, minus the same for costs.
    """
    try:
        return ReportService().monthly_stats()
    except Exception as e:
        logger.error(f"Report generation error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to generate reports: {str(e)}")


@router.get("/monthly/export", summary="Download Monthly Statistics (Excel)")
async def export_monthly_report():
    try:
        stats = ReportService().monthly_stats()
        excel_bytes = _generate_excel_data(stats)
        filename = f"monthly_report_{date.today().isoformat()}.xlsx"

        return StreamingResponse(
            io.BytesIO(excel_bytes),
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": f"attachment; filename={filename}"}
        )
    except Exception as e:
        logger.error(f"Excel export error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to export report: {str(e)}")
