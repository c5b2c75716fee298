from typing import Any

import httpx
from pydantic import ValidationError

from assessor.config import AppConfig
from assessor.interview.domain.errors import RemoteSourceError
from assessor.interview.domain.models import RemoteFile
from assessor.interview.domain.ports import IRemoteQuestionSource
from assessor.shared.telemetry import Telemetry, measure_time

JSON_ACCEPT = "application/vnd.github.v3+json"
RAW_ACCEPT = "application/vnd.github.v3.raw"


class GitHubQuestionSource(IRemoteQuestionSource):
    """
    Lists and downloads markdown question banks from a GitHub repository
    through the contents API.
    """

    def __init__(
        self,
        owner: str = AppConfig.GITHUB_OWNER,
        repo: str = AppConfig.GITHUB_REPO,
        branch: str = AppConfig.GITHUB_BRANCH,
        token: str | None = AppConfig.GITHUB_TOKEN,
        client: httpx.Client | None = None,
    ) -> None:
        self.telemetry = Telemetry("GitHubQuestionSource")
        self.owner = owner
        self.repo = repo
        self.branch = branch

        self.auth_headers = {"Authorization": f"token {token}"} if token else {}
        self.client = client or httpx.Client(
            base_url=AppConfig.GITHUB_API_URL,
            timeout=AppConfig.HTTP_TIMEOUT_SECONDS,
        )

    def _fetch(self, path: str, raw: bool) -> httpx.Response | None:
        """Returns None for 404; raises RemoteSourceError for anything else."""
        url = f"/repos/{self.owner}/{self.repo}/contents/{path.strip('/')}"
        try:
            response = self.client.get(
                url,
                params={"ref": self.branch},
                headers={
                    **self.auth_headers,
                    "Accept": RAW_ACCEPT if raw else JSON_ACCEPT,
                },
            )
        except httpx.HTTPError as e:
            self.telemetry.log_error("GitHub request failed", e, path=path)
            raise RemoteSourceError(path, None, str(e)) from e

        if response.status_code == 404:
            return None
        if response.is_error:
            raise RemoteSourceError(path, response.status_code, response.reason_phrase)
        return response

    @measure_time("github_list_contents")
    def list_contents(self, path: str = "") -> list[RemoteFile]:
        response = self._fetch(path, raw=False)
        if response is None:
            # Missing folder or empty repository
            return []

        try:
            data: Any = response.json()
        except ValueError as e:
            # Proxies and captive portals answer 200 with HTML
            raise RemoteSourceError(path, response.status_code, "invalid JSON") from e
        entries = data if isinstance(data, list) else [data]
        files = []
        for entry in entries:
            try:
                files.append(RemoteFile.model_validate(entry))
            except ValidationError as e:
                self.telemetry.log_error("Skipping unknown entry", e, path=path)
        return files

    @measure_time("github_get_file")
    def get_file_content(self, path: str) -> str | None:
        response = self._fetch(path, raw=True)
        return response.text if response is not None else None

    def find_question_banks(self, path: str = "") -> list[RemoteFile]:
        """Recursive search for markdown files; unreadable folders are skipped."""
        results: list[RemoteFile] = []
        for item in self.list_contents(path):
            if item.type == "file" and item.name.endswith(".md"):
                results.append(item)
            elif item.type == "dir":
                try:
                    results.extend(self.find_question_banks(item.path))
                except RemoteSourceError as e:
                    self.telemetry.log_warning(
                        "Skipping directory", path=item.path, error=str(e)
                    )
        return results

    def close(self) -> None:
        self.client.close()
