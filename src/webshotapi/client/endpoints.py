"""
WebshotAPI endpoint methods shared by the client and batch sessions.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from webshotapi.batch.spec import HttpMethod, RequestSpec

_R = TypeVar("_R")


class EndpointsMixin(Generic[_R]):
    """Endpoint-shaped methods that turn arguments into a RequestSpec.

    Subclasses decide what submitting a spec means by implementing
    ``_submit``: the client executes it, a batch session enqueues it.
    """

    def _submit(self, spec: RequestSpec) -> _R:
        raise NotImplementedError

    def _call(
        self,
        path: str,
        method: HttpMethod,
        params: dict[str, Any] | None = None,
        link: str | None = None,
    ) -> _R:
        return self._submit(
            RequestSpec(target=link, path=path, method=method, params=params or {})
        )

    # Screenshots and extraction

    def pdf(self, link: str, params: dict[str, Any] | None = None) -> _R:
        """Take a website screenshot as a PDF file.

        Args:
            link: Website URL
            params: Rendering options (e.g. width, remove_modals, no_cache)
        """
        return self._call("screenshot/pdf", HttpMethod.POST, params, link)

    def screenshot_jpg(self, link: str, params: dict[str, Any] | None = None) -> _R:
        """Take a website screenshot as a JPEG image."""
        return self._call("screenshot/jpg", HttpMethod.POST, params, link)

    def screenshot_png(self, link: str, params: dict[str, Any] | None = None) -> _R:
        """Take a website screenshot as a PNG image."""
        return self._call("screenshot/png", HttpMethod.POST, params, link)

    def screenshot_json(self, link: str, params: dict[str, Any] | None = None) -> _R:
        """Take a website screenshot and get a JSON description of it."""
        return self._call("screenshot/json", HttpMethod.POST, params, link)

    def extract(self, link: str, params: dict[str, Any] | None = None) -> _R:
        """Extract selectors, words, text or HTML from a website.

        Selectors and words come with their positions, so the result can
        be used to build a word map of the page.

        Args:
            link: Website URL
            params: Extraction options (e.g. extract_selectors, extract_words)
        """
        return self._call("extract", HttpMethod.POST, params, link)

    # Projects

    def projects(self) -> _R:
        """List all projects."""
        return self._call("projects", HttpMethod.GET)

    def project(self, project_id: int | str) -> _R:
        """Get one project."""
        return self._call(f"project/{project_id}", HttpMethod.GET)

    def project_delete(self, project_id: int | str) -> _R:
        """Remove a project."""
        return self._call(f"project/{project_id}", HttpMethod.DELETE)

    def project_create(self, params: dict[str, Any]) -> _R:
        """Create a project."""
        return self._call("project", HttpMethod.POST, params)

    def project_update(self, project_id: int | str, params: dict[str, Any]) -> _R:
        """Update an existing project."""
        return self._call(f"project/{project_id}", HttpMethod.PUT, params)

    def project_create_url(
        self,
        project_id: int | str,
        urls: list[str],
        params: dict[str, Any] | None = None,
    ) -> _R:
        """Add URLs to a project.

        Args:
            project_id: Project ID
            urls: Website URLs to add
            params: Options applied to the added URLs
        """
        return self._call(
            f"project/{project_id}/urls",
            HttpMethod.POST,
            {"urls": list(urls), "params": params or {}},
        )

    def project_delete_url(self, project_id: int | str, url_id: int | str) -> _R:
        """Remove a URL from a project by the ID it was given when added."""
        return self._call(f"project/{project_id}/urls/{url_id}", HttpMethod.DELETE)

    def project_urls(self, project_id: int | str, page: int = 1) -> _R:
        """List URLs of a project, 100 per page."""
        return self._call(f"project/{project_id}/urls/{page}", HttpMethod.GET)
