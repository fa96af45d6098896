"""
ClockifyClient: A client for fetching time entries from the Clockify API.
"""
import logging
import requests
from typing import Optional, Dict, Any, List, Tuple
from datetime import date

from ..errors import ApiError
from ..reports.time_entry import TimeEntry
from ..utils.date_utils import iso_datetime

logger = logging.getLogger(__name__)

PAGE_SIZE = 50


class ClockifyClient:
    """A client for reading time entries from the Clockify API."""

    def __init__(self, api_key: str, workspace_id: str, user_id: str,
                 base_url: str = "https://api.clockify.me/api/v1",
                 session: Optional[requests.Session] = None):
        """Initialize the ClockifyClient.

        Args:
            api_key: Clockify API key
            workspace_id: Clockify workspace ID
            user_id: Clockify user ID
            base_url: API base URL (optional)
            session: requests session to reuse (optional)
        """
        self.api_key = api_key
        self.workspace_id = workspace_id
        self.user_id = user_id
        self.base_url = base_url
        self.session = session or requests.Session()
        self.session.headers.update({"X-Api-Key": api_key})

    def api_get(self, url: str, params: Optional[dict] = None) -> Any:
        """Make a GET request to the Clockify API.

        Raises:
            ApiError: If the request fails
        """
        try:
            resp = self.session.get(url, params=params)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            raise ApiError(f"API request failed: {e}") from e

    def api_get_all(self, url: str, params: Optional[dict] = None) -> List[Any]:
        """GET every page of a list endpoint, stopping at the first short page."""
        results = []
        page = 1
        while True:
            paged_params = dict(params or {})
            paged_params["page"] = page
            paged_params["page-size"] = PAGE_SIZE
            data = self.api_get(url, paged_params)
            if not isinstance(data, list):
                raise ApiError(f"expected a list from {url}, got {type(data).__name__}")
            logger.debug("fetched page %d with %d items", page, len(data))
            results.extend(data)
            if len(data) < PAGE_SIZE:
                return results
            page += 1

    def get_time_entries(self, start_date: date, end_date: date,
                         project: Optional[str] = None,
                         description: Optional[str] = None) -> List[TimeEntry]:
        """Get the user's hydrated time entries for the date range.

        Args:
            start_date: First day (inclusive)
            end_date: Last day (inclusive)
            project: Project ID to restrict to (optional)
            description: Description text to search for (optional)

        Returns:
            List of TimeEntry objects, most recent first as returned by the API
        """
        url = f"{self.base_url}/workspaces/{self.workspace_id}/user/{self.user_id}/time-entries"
        params = {
            "start": iso_datetime(start_date),
            "end": iso_datetime(end_date, is_end=True),
            "hydrated": "true",
        }
        if project:
            params["project"] = project
        if description:
            params["description"] = description

        raw = self.api_get_all(url, params)
        try:
            return [TimeEntry.from_dict(e) for e in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(f"unexpected time entry in API response: {e}") from e

    def get_user_and_workspaces(self) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
        """Get user information and workspaces.

        Returns:
            Tuple of (user_info, workspaces)
        """
        user = self.api_get(f"{self.base_url}/user")
        workspaces = self.api_get(f"{self.base_url}/workspaces")
        return user, workspaces
