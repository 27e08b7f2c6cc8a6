from check_database import check_database
from Enquiry_module.Enquiry_crud import create_enquiry
from Store_module.record_store import RecordStore


def test_reports_tables_and_counts(tmp_path, caplog):
    database_url = f"sqlite:///{tmp_path}/skm.db"
    seeded = RecordStore(database_url)
    seeded.connect()
    seeded.create_schema()
    create_enquiry(seeded, {"name": "A", "email": "a@x.com", "message": "hi"})
    seeded.close()

    with caplog.at_level("INFO", logger="check_database"):
        assert check_database(RecordStore(database_url)) == 0

    messages = "\n".join(record.getMessage() for record in caplog.records)
    assert "enquiries: 1 records" in messages
    assert "appointments: 0 records" in messages


def test_unreachable_store_exits_non_zero(tmp_path):
    assert check_database(RecordStore(f"sqlite:///{tmp_path}/missing-dir/skm.db")) == 1
