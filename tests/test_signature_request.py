from datetime import datetime

from modules.signer.models.signature_request import (
    SignatureMethod,
    SignatureRequest,
    mark_processed,
    with_document,
    with_upload,
)


def make_record(**kwargs):
    data = dict(id=1, subject_id=10, method="ASSINAR", signer_name="Maria",
                signer_identifier="123", signer_email="maria@empresa.com", payload=b"%PDF")
    data.update(kwargs)
    return SignatureRequest(**data)


def test_method_helpers():
    assert make_record().signature_method == SignatureMethod.SIGN
    assert make_record().is_sign()
    assert make_record(method="CONTRAASSINAR").is_countersign()
    assert make_record(method="OUTRO").signature_method is None
    assert make_record(method=None).signature_method is None


def test_signer_data_requires_all_fields():
    assert make_record().has_signer_data()
    assert not make_record(signer_name=None).has_signer_data()
    assert not make_record(signer_identifier="").has_signer_data()
    assert not make_record(signer_email=None).has_signer_data()


def test_transitions_return_new_records():
    record = make_record()
    now = datetime(2024, 5, 1, 12, 0)

    uploaded = with_upload(record, "U1", now)
    documented = with_document(uploaded, "D1", now)
    done = mark_processed(documented)

    assert record.upload_id is None and record.processed is False
    assert (uploaded.upload_id, uploaded.upload_at) == ("U1", now)
    assert (documented.document_id, documented.document_at) == ("D1", now)
    assert documented.upload_id == "U1"
    assert done.processed is True
    assert done.has_document()
