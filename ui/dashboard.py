# ui/dashboard.py
import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import streamlit as st
import requests
import pandas as pd
from config import API_URL
# -------------------- CONFIG --------------------
st.set_page_config(page_title="Resume Intake & Matcher", page_icon="📄", layout="wide")
st.title("📄 Resume Intake & Matcher")

st.markdown(
    "Upload resumes (PDF, Word, or a scanned image), check their ATS readiness, "
    "and rank every stored resume against a job description."
)

# -------------------- SESSION STATE --------------------
if "api_url" not in st.session_state:
    st.session_state.api_url = API_URL

if "last_upload" not in st.session_state:
    st.session_state.last_upload = None

if "resume_list_cache" not in st.session_state:
    st.session_state.resume_list_cache = []


def _error_detail(r: requests.Response) -> str:
    try:
        return r.json().get("detail", r.text)
    except ValueError:
        return r.text


# -------------------- TABS --------------------
tab1, tab2, tab3 = st.tabs(["📤 Upload Resume", "🩺 Analyze Resume", "📊 Rank Candidates"])

# ==================== TAB 1: Upload Resume ====================
with tab1:
    st.subheader("Upload Candidate Resume")

    with st.form("upload_form", clear_on_submit=False):
        resume_file = st.file_uploader(
            "Upload Resume (PDF, DOC, DOCX, JPG, PNG, TIFF, BMP)",
            type=["pdf", "doc", "docx", "jpg", "jpeg", "png", "tiff", "bmp"],
        )
        candidate_name = st.text_input("Candidate Name (optional)")
        job_title = st.text_input("Job Title (optional)")
        submitted = st.form_submit_button("Upload & Extract")

    if submitted:
        if not resume_file:
            st.warning("Please upload a resume first.")
        else:
            files = {"resume": (resume_file.name, resume_file, resume_file.type)}
            data = {"candidate_name": candidate_name, "job_title": job_title}
            # OCR on images can take close to a minute
            with st.spinner("⏳ Uploading and extracting text..."):
                try:
                    r = requests.post(f"{st.session_state.api_url}/resumes/upload", files=files, data=data, timeout=180)
                except requests.exceptions.RequestException as e:
                    st.error(f"❌ Connection error: {e}")
                    st.stop()

            if r.status_code == 201:
                st.session_state.last_upload = r.json()
                st.session_state.resume_list_cache = []
                st.success("✅ Resume uploaded successfully!")
            else:
                st.error(f"❌ Upload failed:\n\n{_error_detail(r)}")

    up = st.session_state.get("last_upload")
    if up:
        with st.container(border=True):
            st.markdown(f"**🆔 Resume ID:** {up.get('resumeId')}")
            st.markdown(f"**📄 File:** {up.get('filename')} ({up.get('fileType')})")
            st.markdown(f"**📝 Extracted:** {up.get('textLength')} characters")


def _load_resumes():
    if not st.session_state.resume_list_cache:
        try:
            resp = requests.get(f"{st.session_state.api_url}/resumes", timeout=30)
            st.session_state.resume_list_cache = resp.json() if resp.status_code == 200 else []
        except requests.exceptions.RequestException:
            st.session_state.resume_list_cache = []
    return st.session_state.resume_list_cache


# ==================== TAB 2: Analyze Resume ====================
with tab2:
    st.subheader("ATS Analysis")
    resumes = _load_resumes()

    if not resumes:
        st.warning("⚠️ No resumes found. Upload one in the first tab.")
    else:
        options = {f"{r['id']} – {r['filename']} ({r.get('candidateName') or 'unknown'})": r["id"] for r in resumes}
        selected = st.selectbox("Select Resume", options=list(options.keys()))

        if st.button("🩺 Analyze"):
            try:
                r = requests.get(f"{st.session_state.api_url}/resumes/{options[selected]}/analyze", timeout=60)
            except requests.exceptions.RequestException as e:
                st.error(f"Connection error: {e}")
                st.stop()

            if r.status_code == 200:
                analysis = r.json()["analysis"]
                st.metric("ATS Score", f"{analysis['atsScore']}/100")
                st.progress(analysis["atsScore"] / 100)

                col1, col2 = st.columns(2)
                with col1:
                    st.markdown("#### ✅ Strengths")
                    for s in analysis["strengths"] or ["—"]:
                        st.markdown(f"- {s}")
                with col2:
                    st.markdown("#### 🔧 Improvements")
                    for s in analysis["improvements"]:
                        st.markdown(f"- {s}")

                st.markdown(f"**🧠 Skills:** {', '.join(analysis['skills']) or '—'}")
                st.markdown(f"**🔑 Keywords:** {', '.join(analysis['keywords']) or '—'}")
            else:
                st.error(f"❌ Analysis failed: {_error_detail(r)}")

# ==================== TAB 3: Rank Candidates ====================
with tab3:
    st.subheader("Rank Candidates Against a Job Description")

    with st.form("rank_form"):
        jd_text = st.text_area("Paste Job Description", height=200)
        submitted_rank = st.form_submit_button("🔍 Rank Resumes")

    if submitted_rank:
        if not jd_text.strip():
            st.warning("Please paste a job description first.")
        else:
            with st.spinner("Ranking resumes..."):
                try:
                    r = requests.post(
                        f"{st.session_state.api_url}/rank",
                        json={"jobDescription": jd_text},
                        timeout=120,
                    )
                except requests.exceptions.RequestException as e:
                    st.error(f"Connection error: {e}")
                    st.stop()

            if r.status_code == 200:
                ranked = r.json()["rankedResumes"]
                if not ranked:
                    st.warning("No resumes uploaded yet.")
                else:
                    table = pd.DataFrame([
                        {
                            "Match (%)": c["matchScore"],
                            "Candidate": c.get("candidateName") or "—",
                            "File": c.get("filename"),
                            "Job Title": c.get("jobTitle"),
                            "Email": c["contactInfo"]["email"],
                            "Phone": c["contactInfo"]["phone"],
                            "Skills": ", ".join(c["skills"]),
                        }
                        for c in ranked
                    ])
                    st.dataframe(table, use_container_width=True, hide_index=True)
            else:
                st.error(f"❌ Ranking failed: {_error_detail(r)}")
