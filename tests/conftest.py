import io

import docx
import fitz  # PyMuPDF
import pytest
from PIL import Image

SAMPLE_RESUME = """Jane Doe
Email: jane.doe@example.com | Phone: 555-123-4567

PROFESSIONAL SUMMARY
Backend engineer with 6+ years building APIs and data services.

EXPERIENCE
Senior Software Engineer | Acme Corp | 2019 - Present
- Developed a payment service in Python and Django handling $2M per day
- Led a team of 5 engineers migrating workloads to AWS and Docker
- Built CI/CD pipelines with Jenkins and reduced deploy time by 40%
- Improved PostgreSQL query latency for reporting dashboards

EDUCATION
B.Sc. Computer Science, State University

SKILLS
Python, Django, PostgreSQL, Redis, AWS, Docker, Kubernetes, Git
"""

SAMPLE_JOB_DESCRIPTION = """Senior Backend Engineer
We are looking for a backend engineer experienced with Python, Django and PostgreSQL.
You will build APIs, deploy services on AWS with Docker and Kubernetes, and mentor engineers.
"""


@pytest.fixture
def sample_resume():
    return SAMPLE_RESUME


@pytest.fixture
def sample_job_description():
    return SAMPLE_JOB_DESCRIPTION


@pytest.fixture
def make_pdf():
    def _make(text=""):
        doc = fitz.open()
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text, fontsize=10)
        data = doc.tobytes()
        doc.close()
        return data
    return _make


@pytest.fixture
def make_docx():
    def _make(paragraphs, table_rows=None):
        document = docx.Document()
        for p in paragraphs:
            document.add_paragraph(p)
        if table_rows:
            table = document.add_table(rows=len(table_rows), cols=len(table_rows[0]))
            for i, row in enumerate(table_rows):
                for j, value in enumerate(row):
                    table.cell(i, j).text = value
        buf = io.BytesIO()
        document.save(buf)
        return buf.getvalue()
    return _make


@pytest.fixture
def make_png():
    def _make():
        buf = io.BytesIO()
        Image.new("RGB", (32, 32), "white").save(buf, format="PNG")
        return buf.getvalue()
    return _make
