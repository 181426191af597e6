"""
Double-Blind Paper Checker - Streamlit Web Application

A simple web interface for checking a single submission.
"""

import io
import json
import tempfile
from pathlib import Path

import streamlit as st

from blindcheck.checker import PdfChecker
from blindcheck.config import CheckerConfig, STYLES, DEFAULT_PAGE_LIMIT, DEFAULT_REFERENCE_LIMIT, DEFAULT_STYLE
from blindcheck.document import PdfDocument
from blindcheck.output_generator import OutputGenerator
from blindcheck.roster import Roster, RosterError


# Page configuration
st.set_page_config(
    page_title="Double-Blind Paper Checker",
    page_icon="🕶️",
    layout="centered"
)

st.title("🕶️ Double-Blind Paper Checker")
st.markdown(
    "Upload a submission to check page limits, template style and "
    "author-revealing content. Results are heuristic: review every flag."
)

st.divider()

uploaded_file = st.file_uploader(
    "Upload your paper",
    type=["pdf"],
    help="Drag and drop a PDF file or click to browse"
)

roster_file = st.file_uploader(
    "Author metadata (optional)",
    type=["csv"],
    help="HotCRP author export: paper,title,first,last,affiliation,email"
)

# Options
col1, col2, col3 = st.columns(3)
with col1:
    style = st.selectbox("Template", STYLES, index=STYLES.index(DEFAULT_STYLE))
with col2:
    page_limit = st.number_input("Page limit", min_value=1, value=DEFAULT_PAGE_LIMIT)
with col3:
    reference_limit = st.number_input("Reference pages", min_value=0, value=DEFAULT_REFERENCE_LIMIT)

check_titles = st.checkbox(
    "Compare titles (text, PDF metadata, roster)",
    help="Often flags legitimately revised titles"
)

st.divider()

if uploaded_file is not None:
    st.info(f"📎 **File:** {uploaded_file.name} ({uploaded_file.size / 1024:.1f} KB)")

    if st.button("🔍 Check Paper", type="primary", use_container_width=True):
        try:
            config = CheckerConfig(
                page_limit=int(page_limit),
                reference_limit=int(reference_limit),
                style=style,
                check_titles=check_titles
            )

            paper = None
            if roster_file is not None:
                roster = Roster()
                roster.load(io.StringIO(roster_file.getvalue().decode("utf-8")))
                paper = roster.paper_for(uploaded_file.name)
                if paper is None:
                    st.warning("Paper not found in author metadata; roster checks skipped.")

            with st.spinner("Checking document..."):
                with tempfile.TemporaryDirectory() as tmp_dir:
                    tmp_pdf = Path(tmp_dir) / uploaded_file.name
                    tmp_pdf.write_bytes(uploaded_file.getvalue())

                    with PdfDocument(str(tmp_pdf)) as doc:
                        checker = PdfChecker(doc, config, paper)
                        issues = checker.compute_issues()
                        result = OutputGenerator.paper_result(checker, issues)

            metric1, metric2, metric3 = st.columns(3)
            with metric1:
                st.metric("Pages", result["page_count"])
            with metric2:
                st.metric("Detected style", result["style"])
            with metric3:
                st.metric("Issues", len(issues))

            st.markdown(f"**Title:** {result['title'] or '(not found)'}")

            if issues:
                st.warning("⚠ Issues found")
                for issue in issues:
                    st.markdown(f"- `{issue.tag}`: {issue.evidence}")
            else:
                st.success("✅ No issues found")

            st.code(result["report_line"], language=None)

            st.download_button(
                label="📥 Download Result (JSON)",
                data=json.dumps(result, indent=2, ensure_ascii=False),
                file_name=f"{Path(uploaded_file.name).stem}_blindcheck.json",
                mime="application/json",
                use_container_width=True
            )

        except RosterError as e:
            st.error(f"❌ Invalid author metadata: {e}")
        except Exception as e:
            st.error(f"❌ Check failed: {str(e)}")
            st.caption("Please ensure your PDF is valid and try again.")

else:
    st.markdown(
        """
        <div style="text-align: center; padding: 40px; color: #888;">
            <p>👆 Upload a PDF file to get started</p>
        </div>
        """,
        unsafe_allow_html=True
    )

# Footer
st.divider()
st.caption(
    "Double-Blind Paper Checker | "
    "A clean result does not guarantee an anonymous submission"
)
