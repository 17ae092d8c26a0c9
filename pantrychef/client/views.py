from __future__ import annotations

import logging
from typing import List, Optional

import markdown
import nh3

from pantrychef.core.models import Video
from pantrychef.core.title import extract_title
from pantrychef.services.exceptions import ServiceError
from .ingredients import IngredientStore
from .proxy import ProxyClient
from .storage import StoragePort

logger = logging.getLogger(__name__)

RECIPE_TITLE_KEY = "pantrychef.recipe_title"
EMPTY_PANTRY = ["no specific ingredients"]
DISCOVER_QUERY = "cooking recipe food shorts quick tutorial"
DISCOVER_COUNT = 20
SAFE_URL_SCHEMES = {"http", "https", "mailto"}


class _View:
    loading: bool = False
    error: Optional[str] = None


class RecipeView(_View):
    """
    Ingredient list + "Get Recipe". Generated text is kept in the store and
    its derived title is handed to the cook view through session storage.
    """

    def __init__(self, store: IngredientStore, proxy: ProxyClient, session: StoragePort):
        self.store = store
        self.proxy = proxy
        self.session = session

    @property
    def ingredients(self):
        return self.store.items

    @property
    def recipe(self) -> Optional[str]:
        return self.store.recipe

    def add_ingredient(self, text: str) -> bool:
        return self.store.add(text)

    def remove_ingredient(self, index: int) -> str:
        return self.store.remove(index)

    def clear(self) -> None:
        self.store.clear()
        self.error = None

    def get_recipe(self) -> Optional[str]:
        if self.loading:
            return None
        self.error = None
        self.loading = True
        try:
            recipe = self.proxy.generate(list(self.store.items) or EMPTY_PANTRY)
        except ServiceError as e:
            logger.warning("Recipe generation failed: %s", e)
            self.error = e.message or "Failed to generate recipe. Please try again."
            return None
        finally:
            self.loading = False

        self.store.recipe = recipe
        title = extract_title(recipe)
        self.session.set(RECIPE_TITLE_KEY, title)
        return recipe

    def recipe_html(self) -> str:
        if not self.store.recipe:
            return ""
        # Model output is untrusted: render, then keep only safe tags and link schemes
        return nh3.clean(markdown.markdown(self.store.recipe), url_schemes=SAFE_URL_SCHEMES)


class CookView(_View):
    """Finds one tutorial video for the recipe generated in RecipeView."""

    def __init__(self, session: StoragePort, proxy: ProxyClient):
        self.session = session
        self.proxy = proxy
        self.recipe_name: Optional[str] = None
        self.video_id: Optional[str] = None

    def load(self) -> Optional[str]:
        self.recipe_name = self.session.get(RECIPE_TITLE_KEY)
        if not self.recipe_name:
            self.error = "No recipe generated yet. Please go to Generate page first."
            return None
        return self.search(self.recipe_name)

    def search(self, recipe_name: str) -> Optional[str]:
        self.loading = True
        self.error = None
        self.video_id = None
        try:
            self.video_id = self.proxy.search_video(f"{recipe_name} recipe cooking tutorial how to make")
        except ServiceError as e:
            self.error = e.message or "Could not find a cooking video for this recipe."
        finally:
            self.loading = False
        return self.video_id

    @property
    def embed_url(self) -> Optional[str]:
        return f"https://www.youtube.com/embed/{self.video_id}" if self.video_id else None

    @property
    def watch_url(self) -> Optional[str]:
        return f"https://www.youtube.com/watch?v={self.video_id}" if self.video_id else None


class DiscoverFeed(_View):
    def __init__(self, proxy: ProxyClient):
        self.proxy = proxy
        self.videos: List[Video] = []

    def fetch(self) -> List[Video]:
        self.loading = True
        self.error = None
        try:
            self.videos = self.proxy.discover(DISCOVER_QUERY, max_results=DISCOVER_COUNT)
        except ServiceError as e:
            self.error = e.message or "Could not load videos."
        finally:
            self.loading = False
        return self.videos

    def retry(self) -> List[Video]:
        return self.fetch()
