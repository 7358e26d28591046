"""
apps_script.py — Google Apps Script exporter
============================================
Serialises a quiz into a standalone Google Apps Script.  Pasting the script
into script.google.com and running ``createQuizForm`` creates a Google Form
in quiz mode with one required multiple-choice item per question.

Pure string templating: same arguments → byte-identical output.  Nothing
here talks to Google; the script is executed by the user, not by this app.
"""

from __future__ import annotations

import json
import re
from typing import Iterable, Optional

from quizmaker.models import QuizItem

POINTS_PER_QUESTION = 10

_PLACEHOLDER = re.compile(r"@@(TITLE|DESCRIPTION|QUIZ_DATA|FOLDER_URL|POINTS)@@")


def escape_js_string(value: str) -> str:
    """Escape *value* for interpolation inside a double-quoted JS literal."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\r", "\\r")
        .replace("\n", "\\n")
    )


_TEMPLATE = """
/**
 * This script was generated by QuizMaker.
 * Running it creates a new Google Form in your Google Drive.
 *
 * === How to use ===
 * 1. Copy all of this code.
 * 2. Open script.google.com and click "New project".
 * 3. Delete the code in the editor and paste this code.
 * 4. Click "Run" (the ▶️ icon) at the top.
 * 5. On the first run Google asks for permission: "Review permissions" →
 *    choose your account → "Advanced" → "Go to (unsafe)" → "Allow".
 * 6. When it finishes, the new form is in your Google Drive.
 */
function createQuizForm() {
  // --- Data exported from QuizMaker ---
  const formTitle = "@@TITLE@@";
  const formDescription = "@@DESCRIPTION@@";
  const quizData = @@QUIZ_DATA@@;
  const targetFolderUrl = "@@FOLDER_URL@@";
  // ------------------------------------

  try {
    const form = FormApp.create(formTitle);
    form.setDescription(formDescription);
    form.setQuiz(true);

    quizData.forEach(item => {
      const mcItem = form.addMultipleChoiceItem();
      mcItem.setTitle(item.question);

      const choices = item.options.map(option => {
        return mcItem.createChoice(option, option === item.answer);
      });

      mcItem.setChoices(choices);
      mcItem.setRequired(true);
      mcItem.setPoints(@@POINTS@@);
    });

    let successMessage = 'Google Form "' + formTitle + '" was created in the root of your Google Drive.';

    if (targetFolderUrl) {
      try {
        const folderIdMatch = targetFolderUrl.match(/[-\\w]{25,}/);
        if (folderIdMatch && folderIdMatch[0]) {
          const folder = DriveApp.getFolderById(folderIdMatch[0]);
          const formFile = DriveApp.getFileById(form.getId());

          // Move: remove from the root folder, add to the target folder.
          DriveApp.getRootFolder().removeFile(formFile);
          folder.addFile(formFile);

          successMessage = 'Google Form "' + formTitle + '" was created in the folder "' + folder.getName() + '".';
        } else if (targetFolderUrl.trim() !== '') {
          Logger.log('Not a valid Google Drive folder URL, so the form was created in My Drive. URL: ' + targetFolderUrl);
        }
      } catch (folderError) {
        Logger.log('Moving the form to the folder failed: ' + folderError.toString() + '. It was created in My Drive.');
      }
    }

    Logger.log(successMessage);
    Logger.log('Published URL: ' + form.getPublishedUrl());
    Logger.log('Edit URL: ' + form.getEditUrl());

  } catch (e) {
    Logger.log('Creating the form failed: ' + e.toString());
  }
}
"""


def build_apps_script(
    items: Iterable[QuizItem],
    title: str,
    description: str,
    folder_url: Optional[str] = None,
) -> str:
    """Return the Apps Script source for *items*; *folder_url* is optional."""
    quiz_data = json.dumps(
        [item.model_dump() for item in items],
        ensure_ascii=False,
        indent=2,
    )
    values = {
        "TITLE":       escape_js_string(title),
        "DESCRIPTION": escape_js_string(description),
        "FOLDER_URL":  escape_js_string(folder_url or ""),
        "POINTS":      str(POINTS_PER_QUESTION),
        "QUIZ_DATA":   quiz_data,
    }
    # Single pass: substituted text is never re-scanned for placeholders.
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], _TEMPLATE)
