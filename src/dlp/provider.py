"""
Process-wide provider of the Cloud DLP client.

Creating a ``DlpServiceClient`` means loading credentials and opening a gRPC
channel, so one client is shared by every directive in the process.
``DlpServiceProvider.acquire`` lazily builds it under double-checked
locking; the first caller's project and credentials win and later
arguments are ignored. A provider can also be constructed directly and
injected into directives, which is how tests supply a fake client.
"""

import logging
import threading

import google.auth
from google.auth import exceptions as auth_exceptions
from google.cloud import dlp_v2
from google.oauth2 import service_account

from .errors import InitializationError

logger = logging.getLogger(__name__)

DLP_SCOPES = ["https://www.googleapis.com/auth/cloud-platform"]


class DlpServiceProvider:
    """Holds a DLP client together with the project it bills against."""

    _instance: "DlpServiceProvider | None" = None
    _lock = threading.Lock()

    def __init__(self, client: dlp_v2.DlpServiceClient, project_id: str):
        self.client = client
        self.project_id = project_id

    @property
    def parent(self) -> str:
        """Resource name sent as the ``parent`` of every DLP request."""
        return f"projects/{self.project_id}"

    @classmethod
    def acquire(
        cls,
        project_id: str | None = None,
        credentials_path: str | None = None,
    ) -> "DlpServiceProvider":
        """
        Return the process-wide provider, creating it on first use.

        Args:
            project_id: GCP project; resolved from the credentials or the
                environment when omitted or empty
            credentials_path: Service account JSON file; application default
                credentials are used when omitted

        Returns:
            The shared provider. Arguments are ignored once it exists.

        Raises:
            InitializationError: If credentials cannot be loaded or no
                project id can be resolved
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls._create(project_id, credentials_path)
        return cls._instance

    @classmethod
    def _create(
        cls,
        project_id: str | None,
        credentials_path: str | None,
    ) -> "DlpServiceProvider":
        try:
            if credentials_path:
                credentials = service_account.Credentials.from_service_account_file(
                    credentials_path, scopes=DLP_SCOPES
                )
                default_project = credentials.project_id
            else:
                credentials, default_project = google.auth.default(scopes=DLP_SCOPES)

            project = project_id or default_project
            if not project:
                raise InitializationError(
                    "No GCP project id provided and none could be resolved from "
                    "the credentials or environment"
                )

            client = dlp_v2.DlpServiceClient(credentials=credentials)
        except (OSError, ValueError, auth_exceptions.GoogleAuthError) as e:
            raise InitializationError(
                f"Unable to create DLP client: {type(e).__name__}: {e}"
            ) from e

        logger.info(
            f"Created DLP client for project {project}",
            extra={"credentials_source": "file" if credentials_path else "default"},
        )
        return cls(client, project)
