"""Input and request types for the publish pipeline."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from vsm_publisher.project import ProjectInfo

from .endpoints import DEFAULT_DOMAIN

DEFAULT_SOURCE_TYPE = "python"
DEFAULT_SOURCE_INSTANCE = "vsm-publisher"


@dataclass
class PublishInput:
    """
    Everything one publish invocation needs.

    Attributes:
        region: Hosting region of the VSM workspace
        host: DNS host of the workspace
        api_token: Technical user API token
        project: Project identity and version
        sbom_path: Explicit SBOM path; defaults to <base_dir>/target/bom.json
        skip_snapshot: Hold back snapshot versions
        data: Free-form metadata as a JSON object string
        source_type: Source type label reported to VSM
        source_instance: Source instance label reported to VSM
        domain: Vendor domain of the token and discovery services
    """

    region: str
    host: str
    api_token: str
    project: ProjectInfo
    sbom_path: Optional[str] = None
    skip_snapshot: bool = True
    data: str = "{}"
    source_type: str = DEFAULT_SOURCE_TYPE
    source_instance: str = DEFAULT_SOURCE_INSTANCE
    domain: str = DEFAULT_DOMAIN


@dataclass
class PublishRequest:
    """A single service registration submitted to the discovery endpoint."""

    service_id: str
    source_type: str
    source_instance: str
    name: str
    description: str
    metadata_json: str
    sbom_file: Optional[Path] = None

    @classmethod
    def build(
        cls,
        project: ProjectInfo,
        source_type: str,
        source_instance: str,
        metadata_json: str,
        sbom_file: Optional[Path] = None,
    ) -> "PublishRequest":
        """
        Build a request for a project.

        The service ID is "<group_id>.<artifact_id>" and a missing or blank
        description becomes an empty string.
        """
        description = project.description or ""
        if not description.strip():
            description = ""

        return cls(
            service_id=f"{project.group_id}.{project.artifact_id}",
            source_type=source_type,
            source_instance=source_instance,
            name=project.artifact_id,
            description=description,
            metadata_json=metadata_json,
            sbom_file=sbom_file,
        )

    def form_fields(self) -> List[Tuple[str, Tuple[None, str]]]:
        """Text parts of the multipart body, in submission order."""
        return [
            ("id", (None, self.service_id)),
            ("sourceType", (None, self.source_type)),
            ("sourceInstance", (None, self.source_instance)),
            ("name", (None, self.name)),
            ("description", (None, self.description)),
            ("data", (None, self.metadata_json)),
        ]
