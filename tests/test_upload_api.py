from app.core.config import settings
from conftest import auth_headers, stored_user

API = "/api/v1"


def _chat(client, user):
    return client.post(f"{API}/chats/", json={"title": "Docs"}, headers=auth_headers(user)).json()["data"]["id"]


def _upload(client, user, chat_id, name="plan.txt", body=b"hello", content_type="text/plain"):
    return client.post(
        f"{API}/chat/upload",
        data={"chat_id": chat_id},
        files={"file": (name, body, content_type)},
        headers=auth_headers(user),
    )


def test_upload_stores_text_on_chat(client, db, make_user):
    user = make_user()
    chat_id = _chat(client, user)

    response = _upload(client, user, chat_id, body="Café menu".encode("utf-8"))

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "File uploaded successfully",
        "file_name": "plan.txt",
        "content_length": len("Café menu"),
    }
    chat = db["chats"].docs[0]
    assert chat["file_content"] == "Café menu"
    assert chat["file_name"] == "plan.txt"
    assert stored_user(db, user)["uploads_today"] == 1


def test_second_trial_upload_same_day_is_rejected(client, make_user):
    user = make_user()
    chat_id = _chat(client, user)

    assert _upload(client, user, chat_id).status_code == 200
    response = _upload(client, user, chat_id)

    assert response.status_code == 429
    assert "Daily File Upload Limit" in response.json()["error"]


def test_upload_without_file_is_rejected(client, make_user):
    user = make_user()
    chat_id = _chat(client, user)

    response = client.post(f"{API}/chat/upload", data={"chat_id": chat_id}, headers=auth_headers(user))

    assert response.status_code == 400
    assert response.json()["error"] == "Missing file or chat ID"


def test_broken_pdf_is_rejected_without_using_quota(client, db, make_user):
    user = make_user()
    chat_id = _chat(client, user)

    response = _upload(client, user, chat_id, name="deck.pdf", body=b"not really a pdf", content_type="application/pdf")

    assert response.status_code == 400
    assert stored_user(db, user)["uploads_today"] == 0


def _pdf_with_text(text: str) -> bytes:
    """Single page PDF drawing `text` in Helvetica."""
    stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R >>",
        b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = b"%PDF-1.4\n"
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"
    xref = len(out)
    out += f"xref\n0 {len(objects) + 1}\n0000000000 65535 f \n".encode()
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref}\n%%EOF\n".encode()
    return out


def test_pdf_text_is_stored_on_chat(client, db, make_user):
    user = make_user()
    chat_id = _chat(client, user)

    response = _upload(
        client, user, chat_id,
        name="deck.pdf", body=_pdf_with_text("Bakery launch plan"), content_type="application/pdf",
    )

    assert response.status_code == 200
    chat = db["chats"].docs[0]
    assert chat["file_name"] == "deck.pdf"
    assert "Bakery launch plan" in chat["file_content"]
    assert response.json()["content_length"] == len(chat["file_content"])
    assert stored_user(db, user)["uploads_today"] == 1


def test_upload_at_the_size_limit_is_accepted(client, make_user, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 10)
    user = make_user()
    chat_id = _chat(client, user)

    response = _upload(client, user, chat_id, body=b"0123456789")

    assert response.status_code == 200
    assert response.json()["content_length"] == 10


def test_oversized_upload(client, make_user, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 4)
    user = make_user()
    chat_id = _chat(client, user)

    response = _upload(client, user, chat_id, body=b"0123456789")

    assert response.status_code == 413
