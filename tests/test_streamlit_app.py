import os
import sys
import unittest

from streamlit.testing.v1 import AppTest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from config import BACKEND_URL_ENV

APP_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "streamlit_app.py")


def _find_by_label(elements, label):
    for idx, elem in enumerate(elements):
        if getattr(elem, "label", None) == label:
            return idx
    raise AssertionError(f"Element with label '{label}' not found")


class StreamlitAppTest(unittest.TestCase):
    def setUp(self) -> None:
        self.yaml_path = "test_gui_settings.yaml"
        if os.path.exists(self.yaml_path):
            os.remove(self.yaml_path)
        os.environ["YAML_PATH"] = self.yaml_path
        # nothing listens here, so every read degrades to an empty collection
        os.environ[BACKEND_URL_ENV] = "http://127.0.0.1:9"
        self.at = AppTest.from_file(APP_PATH, default_timeout=20)
        self.at.run(timeout=20)

    def tearDown(self) -> None:
        os.environ.pop(BACKEND_URL_ENV, None)
        os.environ.pop("YAML_PATH", None)

    def test_renders_planner_with_empty_stores(self) -> None:
        self.assertFalse(self.at.exception)
        self.assertEqual(self.at.radio[0].value, "plan")
        _find_by_label(self.at.button, "Save Workout")

    def test_draft_item_added_without_backend(self) -> None:
        self.at.text_input(key="item_name").input("Squat").run()
        self.at.button[_find_by_label(self.at.button, "Add to List")].click().run()
        tracker = self.at.session_state["tracker"]
        self.assertEqual([i.exercise_name for i in tracker.composer.items], ["Squat"])
        self.assertEqual(self.at.text_input(key="item_name").value, "")

    def test_switch_views(self) -> None:
        for view in ("library", "log", "history"):
            self.at.radio[0].set_value(view).run()
            self.assertFalse(self.at.exception)
            self.assertEqual(self.at.session_state["tracker"].tab, view)


if __name__ == "__main__":
    unittest.main()
