"""
Tests for apps_script.py — Google Apps Script export.
"""
import json

from factories import make_item, make_items

from quizmaker.apps_script import POINTS_PER_QUESTION, build_apps_script, escape_js_string


class TestEscapeJsString:
    def test_quotes_and_backslashes(self):
        assert escape_js_string('a "b" \\ c') == 'a \\"b\\" \\\\ c'

    def test_newlines(self):
        assert escape_js_string("line1\nline2\r") == "line1\\nline2\\r"


class TestBuildAppsScript:
    def test_deterministic(self):
        items = make_items()
        assert build_apps_script(items, "T", "D") == build_apps_script(items, "T", "D")

    def test_entry_point_and_points(self):
        script = build_apps_script(make_items(), "T", "D")
        assert "function createQuizForm()" in script
        assert "form.setQuiz(true);" in script
        assert f"mcItem.setPoints({POINTS_PER_QUESTION});" in script

    def test_no_placeholders_left(self):
        assert "@@" not in build_apps_script(make_items(), "T", "D", "https://drive/x")

    def test_title_and_description_escaped(self):
        script = build_apps_script(make_items(), 'Say "hi"', "two\nlines")
        assert 'const formTitle = "Say \\"hi\\"";' in script
        assert 'const formDescription = "two\\nlines";' in script

    def test_quiz_data_is_json(self):
        items = [make_item(question="経費は？", options=["はい", "いいえ"], answer="はい")]
        script = build_apps_script(items, "T", "D")
        start = script.index("const quizData = ") + len("const quizData = ")
        end = script.index(";\n", start)
        assert json.loads(script[start:end]) == [items[0].model_dump()]
        assert "経費は？" in script

    def test_folder_url_optional(self):
        assert 'const targetFolderUrl = "";' in build_apps_script(make_items(), "T", "D")
        with_folder = build_apps_script(make_items(), "T", "D", "https://drive.google.com/drive/folders/abc")
        assert 'const targetFolderUrl = "https://drive.google.com/drive/folders/abc";' in with_folder

    def test_placeholder_text_in_user_input_kept_literally(self):
        script = build_apps_script(make_items(), "@@DESCRIPTION@@", "real description")
        assert 'const formTitle = "@@DESCRIPTION@@";' in script
