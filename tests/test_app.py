"""
End-to-end tests for the FastAPI service using a temporary SQLite database.
"""

import base64

import pytest
from fastapi.testclient import TestClient

import app as app_module
from app import app

DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("BASE_DIR", str(tmp_path))
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def upload(client, make_docx):
    def _upload(text, filename="cv.docx", **form):
        data = make_docx(text.splitlines())
        return client.post(
            "/resumes/upload",
            files={"resume": (filename, data, DOCX_TYPE)},
            data=form,
        )
    return _upload


class TestUpload:
    """Tests for POST /resumes/upload."""

    def test_upload_docx(self, client, upload, sample_resume, tmp_path):
        r = upload(sample_resume, job_title="Backend Engineer", candidate_name="Jane Doe")

        assert r.status_code == 201
        body = r.json()
        assert body["success"] is True
        assert body["filename"] == "cv.docx"
        assert body["fileType"] == DOCX_TYPE
        assert body["textLength"] > 50
        assert len(list((tmp_path / "resumes").iterdir())) == 1

    def test_upload_pdf(self, client, make_pdf):
        data = make_pdf("Jane Doe\nPython developer with 5 years of experience\nEmail: jane@example.com")
        r = client.post("/resumes/upload", files={"resume": ("cv.pdf", data, "application/pdf")})

        assert r.status_code == 201

    def test_disallowed_type(self, client):
        r = client.post("/resumes/upload", files={"resume": ("cv.txt", b"hello", "text/plain")})

        assert r.status_code == 415
        assert "Unsupported file type" in r.json()["detail"]

    def test_short_text_rejected_and_not_stored(self, client, upload):
        r = upload("Too short to be a resume")

        assert r.status_code == 400
        assert "Could not extract sufficient text" in r.json()["detail"]
        assert client.get("/resumes").json() == []

    def test_scanned_pdf_rejected(self, client, make_pdf):
        r = client.post("/resumes/upload", files={"resume": ("scan.pdf", make_pdf(), "application/pdf")})

        assert r.status_code == 400
        assert r.json()["detail"].startswith("Failed to extract text")

    def test_oversize_rejected(self, client, upload, sample_resume, monkeypatch):
        monkeypatch.setattr(app_module, "MAX_UPLOAD_BYTES", 10)
        r = upload(sample_resume)

        assert r.status_code == 413

    def test_failed_commit_removes_stored_file(self, client, upload, sample_resume, tmp_path, monkeypatch):
        class BrokenSession:
            def __enter__(self):
                return self

            def __exit__(self, *exc):
                return False

            def add(self, obj):
                pass

            def commit(self):
                raise RuntimeError("database is locked")

        monkeypatch.setattr(app_module, "Session", BrokenSession)
        with pytest.raises(RuntimeError):
            upload(sample_resume)

        assert list((tmp_path / "resumes").iterdir()) == []


class TestResumes:
    """Tests for listing, analysis, download and delete."""

    def test_list_includes_contact_and_skills(self, client, upload, sample_resume):
        upload(sample_resume, candidate_name="Jane Doe")
        rows = client.get("/resumes").json()

        assert len(rows) == 1
        assert rows[0]["candidateName"] == "Jane Doe"
        assert rows[0]["jobTitle"] == "Not Specified"
        assert rows[0]["email"] == "jane.doe@example.com"
        assert rows[0]["phone"] == "555-123-4567"
        assert "python" in rows[0]["skills"]

    def test_analyze(self, client, upload, sample_resume):
        resume_id = upload(sample_resume).json()["resumeId"]
        r = client.get(f"/resumes/{resume_id}/analyze")

        assert r.status_code == 200
        analysis = r.json()["analysis"]
        assert analysis["atsScore"] == 100
        assert len(analysis["keywords"]) <= 8

    def test_analyze_needs_100_characters(self, client, upload):
        text = "Python developer, experience with Django and SQL, education BSc."
        assert 50 <= len(text) < 100
        resume_id = upload(text).json()["resumeId"]

        r = client.get(f"/resumes/{resume_id}/analyze")
        assert r.status_code == 400
        assert "Cannot analyze" in r.json()["detail"]

    def test_analyze_unknown(self, client):
        assert client.get("/resumes/999/analyze").status_code == 404

    def test_download_returns_original_bytes(self, client, make_docx, sample_resume):
        data = make_docx(sample_resume.splitlines())
        resume_id = client.post(
            "/resumes/upload", files={"resume": ("cv.docx", data, DOCX_TYPE)}
        ).json()["resumeId"]

        r = client.get(f"/resumes/{resume_id}/download")
        assert r.status_code == 200
        assert r.content == data

    def test_view_returns_base64(self, client, make_docx, sample_resume):
        data = make_docx(sample_resume.splitlines())
        resume_id = client.post(
            "/resumes/upload", files={"resume": ("cv.docx", data, DOCX_TYPE)}
        ).json()["resumeId"]

        body = client.get(f"/resumes/{resume_id}/view").json()
        assert body["filename"] == "cv.docx"
        assert body["fileType"] == DOCX_TYPE
        assert base64.b64decode(body["fileData"]) == data

    def test_view_unknown(self, client):
        assert client.get("/resumes/999/view").status_code == 404

    def test_delete(self, client, upload, sample_resume, tmp_path):
        resume_id = upload(sample_resume).json()["resumeId"]

        assert client.delete(f"/resumes/{resume_id}").status_code == 200
        assert client.get(f"/resumes/{resume_id}/analyze").status_code == 404
        assert list((tmp_path / "resumes").iterdir()) == []


class TestRank:
    """Tests for POST /rank."""

    def test_ranked_descending(self, client, upload, sample_resume, sample_job_description):
        upload("Accountant with ten years of payroll, ledger and audit experience at large firms.")
        upload(sample_resume)
        upload("Python developer who enjoys Django projects and writing clean, tested code daily.")

        r = client.post("/rank", json={"jobDescription": sample_job_description})
        assert r.status_code == 200
        body = r.json()
        scores = [c["matchScore"] for c in body["rankedResumes"]]

        assert body["totalResumes"] == 3
        assert scores == sorted(scores, reverse=True)
        assert body["rankedResumes"][0]["contactInfo"]["email"] == "jane.doe@example.com"

    def test_blank_job_description(self, client):
        r = client.post("/rank", json={"jobDescription": "   "})

        assert r.status_code == 400

    def test_no_resumes(self, client):
        body = client.post("/rank", json={"jobDescription": "Python developer"}).json()

        assert body == {"rankedResumes": [], "totalResumes": 0}


def test_health(client):
    assert client.get("/health").json() == {
        "status": "OK",
        "message": "Server is running",
        "database": "Connected",
    }


def test_running_module_starts_uvicorn(monkeypatch):
    import runpy

    import uvicorn

    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, host, port: calls.append((host, port)))
    runpy.run_module("app", run_name="__main__")

    assert calls == [(app_module.HOST, app_module.PORT)]
