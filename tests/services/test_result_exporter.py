import json
from datetime import datetime

import pytest

from relcrawl.domain.crawl_result import CrawlResult
from relcrawl.domain.user_record import RelationUser, UserRecord
from relcrawl.services.result_exporter import ResultExporter


def _records(*ids):
    return tuple(UserRecord.from_user(RelationUser(i, f"name{i}", f"hi, I'm {i}", f"https://i.example/{i}.png")) for i in ids)


def test_csv_has_header_plus_one_row_per_user():
    result = CrawlResult("csv", "42", ("1", "2"), _records("1", "2"), page_title="Following")
    rows = ResultExporter().csv_rows(result)

    assert len(rows) == 3
    assert rows[0] == ["userId", "userName", "homePage", "userComment", "profileImageUrl"]
    assert rows[1] == ["1", "name1", "https://www.pixiv.net/users/1", "hi, I'm 1", "https://i.example/1.png"]
    assert rows[2][2] == "https://www.pixiv.net/users/2"


def test_csv_content_is_utf8_with_bom_and_quotes_commas():
    result = CrawlResult("csv", "42", ("1",), _records("1"), page_title="t")
    artifact = ResultExporter().export(result)

    assert artifact.content.startswith(b"\xef\xbb\xbf")
    assert artifact.media_type == "text/csv"
    text = artifact.content.decode("utf-8-sig")
    assert '"hi, I\'m 1"' in text


def test_csv_filename_from_sanitized_title():
    result = CrawlResult("csv", "42", ("1",), _records("1"), page_title='a/b:c*? "follows"')
    assert ResultExporter().csv_filename(result) == "a_b_c__ _follows_.csv"


def test_csv_filename_falls_back_when_title_missing():
    result = CrawlResult("csv", "42", ("1",), _records("1"), kind="followers")
    assert ResultExporter().csv_filename(result) == "followers list-user 42.csv"


def test_json_body_is_flat_id_array():
    result = CrawlResult("json", "42", ("1", "2", "3"))
    artifact = ResultExporter(clock=lambda: datetime(2024, 5, 6, 7, 8, 9)).export(result)

    assert artifact.content == b'["1","2","3"]'
    assert json.loads(artifact.content) == ["1", "2", "3"]
    assert artifact.media_type == "application/json"


def test_json_filename_embeds_total_owner_and_timestamp():
    result = CrawlResult("json", "42", ("1", "2", "3"))
    artifact = ResultExporter(clock=lambda: datetime(2024, 5, 6, 7, 8, 9)).export(result)

    assert artifact.filename == "following list-total 3-from user 42-2024_05_06 07_08_09.json"


def test_export_does_not_mutate_result():
    records = _records("1", "2")
    result = CrawlResult("csv", "42", ("1", "2"), records, page_title="x")
    ResultExporter().export(result)
    assert result.records == records
    assert result.user_ids == ("1", "2")


def test_unknown_format_rejected():
    with pytest.raises(ValueError):
        ResultExporter().export(CrawlResult("xml", "42", ("1",)))
