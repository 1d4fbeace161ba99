from __future__ import annotations

import csv
import io
import json
from datetime import datetime
from typing import Callable, Optional

from relcrawl.domain.crawl_result import CrawlResult, ExportArtifact
from relcrawl.domain.user_record import UserRecord
from relcrawl.utils.filename_utils import replace_unsafe_str, timestamp_for_filename


class ResultExporter:
    """Shape a frozen CrawlResult into a downloadable file.

    Pure transform: it only reads the result it is given.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or datetime.now

    def export(self, result: CrawlResult) -> ExportArtifact:
        if result.export_format == "csv":
            return self.to_csv(result)
        if result.export_format == "json":
            return self.to_json(result)
        raise ValueError(f"Unknown export format: {result.export_format!r}")

    def csv_rows(self, result: CrawlResult) -> list[list[str]]:
        rows = [UserRecord.header()]
        rows.extend(record.as_row() for record in result.records)
        return rows

    def csv_filename(self, result: CrawlResult) -> str:
        title = result.page_title
        if not title or not title.strip():
            title = f"{result.kind} list-user {result.user_id}"
        return replace_unsafe_str(title) + ".csv"

    def to_csv(self, result: CrawlResult) -> ExportArtifact:
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\r\n")
        writer.writerows(self.csv_rows(result))
        # BOM so spreadsheet programs detect UTF-8
        content = buf.getvalue().encode("utf-8-sig")
        return ExportArtifact(self.csv_filename(result), content, "text/csv")

    def json_filename(self, result: CrawlResult) -> str:
        stamp = timestamp_for_filename(self._clock())
        return f"following list-total {result.total}-from user {result.user_id}-{stamp}.json"

    def to_json(self, result: CrawlResult) -> ExportArtifact:
        content = json.dumps(list(result.user_ids), ensure_ascii=False, separators=(",", ":")).encode("utf-8")
        return ExportArtifact(self.json_filename(result), content, "application/json")
