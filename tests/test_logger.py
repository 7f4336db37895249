import logging

from logger import LOG_COLUMNS, get_logger, load_logs, log_submission


def test_load_logs_without_file(tmp_path):
    df = load_logs(tmp_path / "missing.csv")
    assert list(df.columns) == LOG_COLUMNS
    assert df.empty


def test_log_submission_appends(tmp_path):
    log_file = tmp_path / "log.csv"
    log_submission("1042", "tutela", "a@b.co", "Success", "ok", log_file=log_file)
    log_submission("1043", "transito", "c@d.co", "Failed", "502", log_file=log_file)

    df = load_logs(log_file)
    assert list(df.columns) == LOG_COLUMNS
    assert list(df["Order"]) == ["1042", "1043"]
    assert list(df["Status"]) == ["Success", "Failed"]


def test_empty_log_file_reads_as_empty(tmp_path):
    log_file = tmp_path / "log.csv"
    log_file.write_text("")
    assert load_logs(log_file).empty


def test_get_logger_namespaced():
    log = get_logger("dispatcher")
    assert isinstance(log, logging.Logger)
    assert log.name == "intake.dispatcher"
