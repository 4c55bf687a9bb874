from app.forms.artist_form import ArtistFormState, DuplicateGenreError
from app.forms.show_form import ShowFormState

__all__ = ["ArtistFormState", "DuplicateGenreError", "ShowFormState"]
