from relcrawl.domain.crawl_result import ExportArtifact
from relcrawl.services.artifact_sink import FileArtifactSink


def test_save_creates_directory_and_writes_bytes(tmp_path):
    out = tmp_path / "nested" / "exports"
    sink = FileArtifactSink(output_dir=str(out))

    path = sink.save(ExportArtifact("list.json", b'["1"]', "application/json"))

    assert path == str(out / "list.json")
    assert (out / "list.json").read_bytes() == b'["1"]'


def test_existing_file_is_not_overwritten(tmp_path):
    sink = FileArtifactSink(output_dir=str(tmp_path))
    first = sink.save(ExportArtifact("list.csv", b"a", "text/csv"))
    second = sink.save(ExportArtifact("list.csv", b"b", "text/csv"))
    third = sink.save(ExportArtifact("list.csv", b"c", "text/csv"))

    assert first.endswith("list.csv")
    assert second.endswith("list (1).csv")
    assert third.endswith("list (2).csv")
    assert (tmp_path / "list.csv").read_bytes() == b"a"
