from typing import Any, Dict, List, Optional, Tuple
from datetime import date, timedelta
from enum import Enum
from io import BytesIO, StringIO
import csv
import logging

import openpyxl
import pandas as pd
from openpyxl.styles import Font
from pydantic import BaseModel

from ..core.config import settings
from ..models.database_models import TaskStatus
from .collection_service import utcnow
from .inventory_service import InventoryService, inventory_service
from .production_service import ProductionService, production_service
from .task_service import TaskService, task_service

logger = logging.getLogger(__name__)

# Document layout: the first page loses room to the title and summary
FIRST_PAGE_LINES = 32
PAGE_LINES = 36
# Production and task documents list at most this many records
DOCUMENT_RECORD_LIMIT = 30


class ReportType(str, Enum):
    PRODUCTION = "production"
    TASKS = "tasks"
    INVENTORY = "inventory"


CSV_HEADERS = {
    ReportType.PRODUCTION: ["Date", "Worker", "Product", "Quantity", "Shift"],
    ReportType.TASKS: ["Product Type", "Assigned Worker", "Status", "Estimated Time (min)", "Created Date"],
    ReportType.INVENTORY: ["Item Name", "Current Stock", "Min Stock Level", "Unit", "Last Updated"],
}


class ReportDocument(BaseModel):
    report_type: ReportType
    title: str
    summary: List[str]
    pages: List[List[str]]

    @property
    def filename(self) -> str:
        return f"dwoms_{self.report_type.value}_report.xlsx"


def paginate(lines: List[str]) -> List[List[str]]:
    pages = [lines[:FIRST_PAGE_LINES]]
    rest = lines[FIRST_PAGE_LINES:]
    for start in range(0, len(rest), PAGE_LINES):
        pages.append(rest[start:start + PAGE_LINES])
    return pages


class ReportingService:
    def __init__(self, production: Optional[ProductionService] = None, tasks: Optional[TaskService] = None,
                 inventory: Optional[InventoryService] = None):
        self.production = production or production_service
        self.tasks = tasks or task_service
        self.inventory = inventory or inventory_service

    @staticmethod
    def default_range(today: Optional[date] = None) -> Tuple[date, date]:
        today = today or utcnow().date()
        return today - timedelta(days=settings.REPORT_DEFAULT_DAYS), today

    # ── data slices ─────────────────────────────────────────────────────────

    async def production_frame(self, start: date, end: date) -> pd.DataFrame:
        entries = await self.production.list_entries()
        df = pd.DataFrame([e.model_dump(mode="json") for e in entries])
        if not df.empty:
            df = df[(df['date'] >= start.isoformat()) & (df['date'] <= end.isoformat())]
        return df

    async def tasks_frame(self, start: date, end: date) -> pd.DataFrame:
        tasks = await self.tasks.list_tasks()
        df = pd.DataFrame([t.model_dump(mode="json") for t in tasks])
        if not df.empty:
            df['created_date'] = df['timestamp'].str[:10]
            df = df[(df['created_date'] >= start.isoformat()) & (df['created_date'] <= end.isoformat())]
        return df

    async def inventory_frame(self) -> pd.DataFrame:
        items = await self.inventory.list_items()
        df = pd.DataFrame([i.model_dump(mode="json") for i in items])
        if not df.empty:
            df['is_low_stock'] = df['current_stock'] <= df['min_stock_level']
            df['last_updated_date'] = df['last_updated'].str[:10]
        return df

    # ── summary ─────────────────────────────────────────────────────────────

    async def get_summary(self, start: date, end: date) -> Dict[str, Any]:
        production_df = await self.production_frame(start, end)
        tasks_df = await self.tasks_frame(start, end)
        inventory_df = await self.inventory_frame()

        completed = 0
        if not tasks_df.empty:
            completed = int((tasks_df['status'] == TaskStatus.COMPLETED.value).sum())

        return {
            'period_start': start.isoformat(),
            'period_end': end.isoformat(),
            'production_entries': len(production_df),
            'total_units_produced': int(production_df['quantity'].sum()) if not production_df.empty else 0,
            'tasks': len(tasks_df),
            'tasks_completed': completed,
            'tasks_pending': len(tasks_df) - completed,
            'inventory_items': len(inventory_df),
            'low_stock_items': int(inventory_df['is_low_stock'].sum()) if not inventory_df.empty else 0,
        }

    # ── CSV ─────────────────────────────────────────────────────────────────

    async def generate_csv(self, report_type: ReportType, start: date, end: date,
                           today: Optional[date] = None) -> Tuple[str, str]:
        """Return (filename, csv text) for one report."""
        report_type = ReportType(report_type)
        output = StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(CSV_HEADERS[report_type])

        if report_type == ReportType.PRODUCTION:
            df = await self.production_frame(start, end)
            for row in df.to_dict("records"):
                writer.writerow([row['date'], row['worker_name'], row['product_name'], row['quantity'], row['shift']])
            filename = f"production_{start.isoformat()}_to_{end.isoformat()}.csv"
        elif report_type == ReportType.TASKS:
            df = await self.tasks_frame(start, end)
            for row in df.to_dict("records"):
                writer.writerow([row['product_type'], row['assigned_worker_name'], row['status'],
                                 row['estimated_time'], row['created_date']])
            filename = f"tasks_{start.isoformat()}_to_{end.isoformat()}.csv"
        else:
            df = await self.inventory_frame()
            for row in df.to_dict("records"):
                writer.writerow([row['item_name'], row['current_stock'], row['min_stock_level'],
                                 row['unit'], row['last_updated_date']])
            today = today or utcnow().date()
            filename = f"inventory_{today.isoformat()}.csv"

        logger.info(f"[Reports] Exported {filename} ({len(df)} rows)")
        return filename, output.getvalue()

    # ── paginated document ──────────────────────────────────────────────────

    async def generate_document(self, report_type: ReportType, start: date, end: date,
                                today: Optional[date] = None) -> ReportDocument:
        report_type = ReportType(report_type)

        if report_type == ReportType.PRODUCTION:
            df = await self.production_frame(start, end)
            total_quantity = int(df['quantity'].sum()) if not df.empty else 0
            title = f"Production Report ({start.isoformat()} to {end.isoformat()})"
            summary = [f"Total Entries: {len(df)}", f"Total Quantity: {total_quantity}"]
            lines = [
                f"{r['date']} | {r['worker_name']} | {r['product_name']} | {r['quantity']} units | {r['shift']}"
                for r in df.to_dict("records")[:DOCUMENT_RECORD_LIMIT]
            ]
        elif report_type == ReportType.TASKS:
            df = await self.tasks_frame(start, end)
            completed = int((df['status'] == TaskStatus.COMPLETED.value).sum()) if not df.empty else 0
            title = f"Tasks Report ({start.isoformat()} to {end.isoformat()})"
            summary = [f"Total Tasks: {len(df)}", f"Completed: {completed}"]
            lines = [
                f"{r['product_type']} | {r['assigned_worker_name']} | {r['status']} | {r['estimated_time']} min"
                for r in df.to_dict("records")[:DOCUMENT_RECORD_LIMIT]
            ]
        else:
            df = await self.inventory_frame()
            low = int(df['is_low_stock'].sum()) if not df.empty else 0
            today = today or utcnow().date()
            title = f"Inventory Report ({today.isoformat()})"
            summary = [f"Total Items: {len(df)}", f"Low Stock: {low}"]
            lines = [
                f"{r['item_name']} | {r['current_stock']} {r['unit']} (min: {r['min_stock_level']})"
                + (" [LOW]" if r['is_low_stock'] else "")
                for r in df.to_dict("records")
            ]

        return ReportDocument(report_type=report_type, title=title, summary=summary, pages=paginate(lines))

    @staticmethod
    def render_workbook(document: ReportDocument) -> bytes:
        """One worksheet per page; title and summary head the first sheet."""
        wb = openpyxl.Workbook()
        wb.remove(wb.active)

        for number, page in enumerate(document.pages, start=1):
            ws = wb.create_sheet(f"Page {number}")
            row = 1
            if number == 1:
                ws.cell(row=row, column=1, value=document.title).font = Font(size=16, bold=True)
                row += 1
                for col, text in enumerate(document.summary, start=1):
                    ws.cell(row=row, column=col, value=text).font = Font(size=10, color="646464")
                row += 2
            for line in page:
                ws.cell(row=row, column=1, value=line)
                row += 1
            ws.column_dimensions['A'].width = 90

        output = BytesIO()
        wb.save(output)
        return output.getvalue()


reporting_service = ReportingService()
