"""
Selection state tests for ReviewPack.

Tests the pure view/cursor transitions.
"""

from reviewpack.review import ReviewSelection, ReviewView, order_checkpoints


class TestReviewSelection:
    """Test view switching and cursor moves."""

    def test_defaults(self):
        sel = ReviewSelection()
        assert sel.view == ReviewView.STUDENTS
        assert sel.student_id is None
        assert sel.checkpoint_id is None

    def test_entering_matrix_selects_first_checkpoint(self, package):
        ordering = order_checkpoints(package.checkpoints)
        sel = ReviewSelection().show_matrix(ordering)
        assert sel.view == ReviewView.MATRIX
        assert sel.checkpoint_id == "c2"

    def test_entering_matrix_keeps_existing_checkpoint(self, package):
        ordering = order_checkpoints(package.checkpoints)
        sel = ReviewSelection().select_checkpoint("c1").show_matrix(ordering)
        assert sel.checkpoint_id == "c1"

    def test_entering_matrix_without_checkpoints(self):
        sel = ReviewSelection().show_matrix(order_checkpoints([]))
        assert sel.view == ReviewView.MATRIX
        assert sel.checkpoint_id is None

    def test_select_student_from_matrix_switches_view(self, package):
        ordering = order_checkpoints(package.checkpoints)
        sel = ReviewSelection().show_matrix(ordering).select_student_from_matrix("s2")
        assert sel.view == ReviewView.STUDENTS
        assert sel.student_id == "s2"
        assert sel.checkpoint_id == "c2"

    def test_select_checkpoint_from_list_switches_view(self):
        sel = ReviewSelection().select_checkpoint_from_list("c1")
        assert sel.view == ReviewView.MATRIX
        assert sel.checkpoint_id == "c1"

    def test_plain_selects_keep_view(self):
        sel = ReviewSelection().select_student("s1").select_checkpoint("c1")
        assert sel.view == ReviewView.STUDENTS
        assert sel.student_id == "s1"
        assert sel.checkpoint_id == "c1"

    def test_cursors_independent(self):
        sel = ReviewSelection().select_student("s1").select_checkpoint("c1").clear_student()
        assert sel.student_id is None
        assert sel.checkpoint_id == "c1"

    def test_blank_ids_mean_no_selection(self):
        sel = ReviewSelection().select_student("  ").select_checkpoint(None)
        assert sel.student_id is None
        assert sel.checkpoint_id is None

    def test_transitions_are_pure(self):
        original = ReviewSelection()
        moved = original.select_student_from_matrix("s1")
        assert original == ReviewSelection()
        assert moved is not original

    def test_same_package_keeps_selection(self):
        sel = ReviewSelection(package_id="p1").select_student("s1")
        assert sel.for_package("p1") is sel

    def test_new_package_resets_selection(self):
        sel = ReviewSelection(package_id="p1").select_checkpoint_from_list("c1").select_student("s1")
        reset = sel.for_package("p2")
        assert reset == ReviewSelection(package_id="p2")
        assert reset.view == ReviewView.STUDENTS
