"""
ReviewPack - Class review for checkpoint-video assignments

Streamlit application for teachers: see who watched, who answered what,
and how the class did on each checkpoint.

Usage:
    streamlit run app.py
"""

import streamlit as st

from reviewpack.review import (
    ReviewSession,
    ReviewView,
    SnapshotLoader,
)
from reviewpack.utils import configure_logging, load_settings
from reviewpack.viewer import (
    checkpoint_label,
    get_review_css,
    render_checkpoint_detail,
    render_matrix,
    render_question_list,
    render_stats_bar,
    render_student_detail,
    render_student_list,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

SETTINGS = load_settings()
logger = configure_logging(SETTINGS.log_level)

st.set_page_config(
    page_title=SETTINGS.page_title,
    page_icon="🎬",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "loader" not in st.session_state:
        st.session_state.loader = SnapshotLoader(SETTINGS.snapshot_path)

    if "review" not in st.session_state:
        session = ReviewSession(student_order=SETTINGS.student_order)
        session.refresh(st.session_state.loader)
        st.session_state.review = session


# -----------------------------------------------------------------------------
# Sidebar: Package + Stats
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with package info, stats and reload."""
    review: ReviewSession = st.session_state.review
    st.sidebar.title("🎬 Class Review")

    if review.has_package:
        package = review.snapshot.package
        st.sidebar.markdown(f"**{package.title or package.id}**")
        if package.subject:
            st.sidebar.caption(package.subject)
    else:
        st.sidebar.info("No package loaded.")

    stats = review.stats
    st.sidebar.markdown(f"**Students:** {stats.total_students}")
    st.sidebar.markdown(render_stats_bar(stats), unsafe_allow_html=True)
    if stats.total_students:
        st.sidebar.progress(stats.submitted_count / stats.total_students)

    st.sidebar.divider()

    if st.sidebar.button("Reload results", use_container_width=True):
        if review.refresh(st.session_state.loader):
            st.rerun()

    if review.error_message:
        st.sidebar.error(review.error_message)

    st.sidebar.divider()

    # View selector
    st.sidebar.subheader("View")
    views = [ReviewView.STUDENTS, ReviewView.MATRIX]
    choice = st.sidebar.radio(
        "Select view",
        ["Students", "Class matrix"],
        index=views.index(review.view),
        horizontal=True,
        label_visibility="collapsed",
    )
    chosen = views[["Students", "Class matrix"].index(choice)]
    if chosen != review.view:
        if chosen == ReviewView.MATRIX:
            review.show_matrix()
        else:
            review.show_students()
        st.rerun()


# -----------------------------------------------------------------------------
# Main Content: Students View
# -----------------------------------------------------------------------------

def render_students_view():
    """Render the student list with a picker."""
    review: ReviewSession = st.session_state.review
    st.subheader("Students")

    students = review.student_list()
    if students:
        names = {r.student_id: r.student_name or r.student_id for r in students}
        ids = [""] + list(names)
        current = review.selection.student_id or ""
        picked = st.selectbox(
            "Student",
            ids,
            index=ids.index(current) if current in ids else 0,
            format_func=lambda sid: names.get(sid, "Select a student"),
        )
        if (picked or None) != review.selection.student_id:
            review.select_student(picked or None)
            st.rerun()

    st.markdown(
        render_student_list(review.student_views(), review.selection.student_id),
        unsafe_allow_html=True,
    )


# -----------------------------------------------------------------------------
# Main Content: Matrix View
# -----------------------------------------------------------------------------

def render_matrix_view():
    """Render the class matrix and the selected checkpoint's breakdown."""
    review: ReviewSession = st.session_state.review
    st.subheader("Class answers")
    st.caption("Pick a question number to see every student's answer.")

    if not review.ordering.is_empty:
        items = review.ordering.items
        ids = [item.id for item in items]
        current = review.selection.checkpoint_id
        picked = st.radio(
            "Question",
            ids,
            index=ids.index(current) if current in ids else 0,
            format_func=lambda cid: str(review.ordering.position_of(cid)),
            horizontal=True,
        )
        if picked != current:
            review.select_checkpoint(picked)
            st.rerun()

    st.markdown(
        render_matrix(review.matrix, review.selection.checkpoint_id),
        unsafe_allow_html=True,
    )

    students = review.matrix.students
    if students:
        names = {r.student_id: r.student_name or r.student_id for r in students}
        target = st.selectbox(
            "Open student detail",
            [""] + list(names),
            format_func=lambda sid: names.get(sid, "Select a student"),
        )
        if target:
            review.select_student_from_matrix(target)
            st.rerun()

    st.divider()
    st.markdown(render_checkpoint_detail(review.selected_breakdown()), unsafe_allow_html=True)


# -----------------------------------------------------------------------------
# Side Column: Questions + Student Detail
# -----------------------------------------------------------------------------

def render_side_column():
    """Render the question list and the selected student's detail."""
    review: ReviewSession = st.session_state.review

    st.subheader("Questions")
    for item in review.ordering:
        if st.button(checkpoint_label(item), key=f"cp_{item.id}", use_container_width=True):
            review.select_checkpoint_from_list(item.id)
            st.rerun()
    st.markdown(
        render_question_list(review.ordering, review.selection.checkpoint_id),
        unsafe_allow_html=True,
    )

    st.divider()
    st.subheader("Student detail")
    st.markdown(
        render_student_detail(review.selected_student, review.selected_student_detail()),
        unsafe_allow_html=True,
    )


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()
    st.markdown(get_review_css(), unsafe_allow_html=True)

    review: ReviewSession = st.session_state.review
    if not review.has_package:
        st.error(review.error_message or "No package loaded.")
        st.code(f"""
# Point the app at a snapshot file:
REVIEWPACK_SNAPSHOT=path/to/snapshot.json streamlit run app.py
# currently: {SETTINGS.snapshot_path}
        """)
        return

    st.title(review.package_title or "Class Review")

    col1, col2 = st.columns([3, 2])
    with col1:
        if review.view == ReviewView.MATRIX:
            render_matrix_view()
        else:
            render_students_view()
    with col2:
        render_side_column()


if __name__ == "__main__":
    main()
