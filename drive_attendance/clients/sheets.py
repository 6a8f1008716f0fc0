import logging
import re
from typing import Any, Sequence

from drive_attendance.clients.base import GoogleServiceClient

logger = logging.getLogger(__name__)

Scalar = str | int | float | bool

_PLAIN_TITLE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def a1_range(sheet_title: str, cells: str) -> str:
    """Qualify ``cells`` with a sheet title, quoting the title when A1 notation needs it."""
    if _PLAIN_TITLE.match(sheet_title):
        return f"{sheet_title}!{cells}"
    escaped = sheet_title.replace("'", "''")
    return f"'{escaped}'!{cells}"


class SheetsClient(GoogleServiceClient):
    api_name = "sheets"
    api_version = "v4"

    def sheet_titles(self, spreadsheet_id: str) -> list[str]:
        data = self._call(
            f"Reading sheets of spreadsheet {spreadsheet_id}",
            lambda service: service.spreadsheets().get(
                spreadsheetId=spreadsheet_id, fields="sheets.properties.title"
            ),
        )
        return [
            sheet.get("properties", {}).get("title")
            for sheet in data.get("sheets", [])
        ]

    def ensure_sheet(self, spreadsheet_id: str, sheet_title: str) -> bool:
        """Create the tab ``sheet_title`` if it is missing. Returns True when created."""
        if sheet_title in self.sheet_titles(spreadsheet_id):
            return False

        logger.info("Creating sheet %r in spreadsheet %s", sheet_title, spreadsheet_id)
        self._call(
            f"Creating sheet {sheet_title}",
            lambda service: service.spreadsheets().batchUpdate(
                spreadsheetId=spreadsheet_id,
                body={"requests": [{"addSheet": {"properties": {"title": sheet_title}}}]},
            ),
        )
        return True

    def append_rows(
        self,
        spreadsheet_id: str,
        range_spec: str,
        rows: Sequence[Sequence[Scalar]],
    ) -> dict[str, Any]:
        """Append rows after the last populated row of ``range_spec``.

        Rows shorter than the range are padded with empty cells by Sheets;
        callers are expected to keep to the column contract of the tab.
        """
        values = [list(row) for row in rows]
        logger.info("Appending %d row(s) to %s", len(values), range_spec)
        return self._call(
            f"Appending to {range_spec}",
            lambda service: service.spreadsheets().values().append(
                spreadsheetId=spreadsheet_id,
                range=range_spec,
                valueInputOption="RAW",
                insertDataOption="INSERT_ROWS",
                body={"values": values},
            ),
        )

    def write_header(
        self, spreadsheet_id: str, sheet_title: str, headers: Sequence[str]
    ) -> dict[str, Any]:
        return self._call(
            f"Writing header of {sheet_title}",
            lambda service: service.spreadsheets().values().update(
                spreadsheetId=spreadsheet_id,
                range=a1_range(sheet_title, "A1:Z1"),
                valueInputOption="RAW",
                body={"values": [list(headers)]},
            ),
        )
