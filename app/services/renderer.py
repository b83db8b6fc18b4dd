"""Maps a session's state onto what the result pane displays."""

from app.models.letter_models import ResultState
from app.models.letter_models import ResultView
from app.models.letter_models import SessionState

EMPTY_TITLE = "No Letter Generated Yet"
EMPTY_MESSAGE = 'Fill in your details and click "Generate Letter" to create your professional resignation letter.'
LOADING_MESSAGE = "Generating your letter..."


def render_result(state: SessionState) -> ResultView:
    """Pick the LOADING, EMPTY or POPULATED view for *state*.

    An outstanding generation always shows the loading view, even when an
    earlier letter is still held in the session. Populated text is passed
    through untouched; whitespace is preserved by the template.
    """
    if state.is_loading:
        return ResultView(state=ResultState.LOADING, message=LOADING_MESSAGE)
    if not state.letter:
        return ResultView(state=ResultState.EMPTY, title=EMPTY_TITLE, message=EMPTY_MESSAGE)
    return ResultView(state=ResultState.POPULATED, text=state.letter)
