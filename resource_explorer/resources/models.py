"""Resource model derived from an OpenAPI document."""
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any


@dataclass
class ResourceOperation:
    """A single HTTP operation belonging to a resource."""

    method: str  # GET / POST / PUT / PATCH / DELETE / HEAD / OPTIONS
    path: str  # /users/{id}
    operation_id: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: List[Dict[str, Any]] = field(default_factory=list)
    request_body: Optional[Dict[str, Any]] = None
    responses: Dict[str, Any] = field(default_factory=dict)
    tags: List[str] = field(default_factory=list)

    def path_parameters(self) -> List[Dict[str, Any]]:
        """Parameters located in the path."""
        return [p for p in self.parameters if p.get("in") == "path"]

    def query_parameters(self) -> List[Dict[str, Any]]:
        """Parameters located in the query string."""
        return [p for p in self.parameters if p.get("in") == "query"]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = {
            "method": self.method,
            "path": self.path,
            "parameters": self.parameters,
            "responses": self.responses,
            "tags": self.tags,
        }
        if self.operation_id is not None:
            data["operationId"] = self.operation_id
        if self.summary is not None:
            data["summary"] = self.summary
        if self.description is not None:
            data["description"] = self.description
        if self.request_body is not None:
            data["requestBody"] = self.request_body
        return data


@dataclass
class ResourceInfo:
    """A RESTful resource inferred from a group of paths."""

    name: str
    path_pattern: str  # Representative path
    base_path: str  # Collection path used for requests
    operations: List[ResourceOperation] = field(default_factory=list)
    identifier_field: str = "id"
    is_restful: bool = True
    tags: List[str] = field(default_factory=list)
    sub_resources: List["ResourceInfo"] = field(default_factory=list)

    def get_operation(self, method: str, path: Optional[str] = None) -> Optional[ResourceOperation]:
        """Return the first operation with the given method (and path, if given)."""
        for operation in self.operations:
            if operation.method == method.upper() and (path is None or operation.path == path):
                return operation
        return None

    def get_sub_resource(self, name: str) -> Optional["ResourceInfo"]:
        """Return a direct sub-resource by name."""
        for sub in self.sub_resources:
            if sub.name == name:
                return sub
        return None

    def methods(self) -> List[str]:
        """Distinct HTTP methods supported, in declaration order."""
        seen = []
        for operation in self.operations:
            if operation.method not in seen:
                seen.append(operation.method)
        return seen

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "pathPattern": self.path_pattern,
            "basePath": self.base_path,
            "operations": [op.to_dict() for op in self.operations],
            "identifierField": self.identifier_field,
            "isRESTful": self.is_restful,
            "tags": self.tags,
            "subResources": [sub.to_dict() for sub in self.sub_resources],
        }


@dataclass
class ResourceStatistics:
    """Aggregate counts over the resource forest."""

    total_resources: int = 0
    total_paths: int = 0
    total_operations: int = 0
    restful_resources: int = 0
    method_counts: Dict[str, int] = field(default_factory=dict)
    tag_counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "totalResources": self.total_resources,
            "totalPaths": self.total_paths,
            "totalOperations": self.total_operations,
            "restfulResources": self.restful_resources,
            "methodCounts": dict(self.method_counts),
            "tagCounts": dict(self.tag_counts),
        }


@dataclass
class DocumentInfo:
    """Basic information about a parsed document."""

    title: str
    version: str
    description: Optional[str] = None
    openapi_version: str = "unknown"
    servers: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "title": self.title,
            "version": self.version,
            "description": self.description,
            "openApiVersion": self.openapi_version,
            "servers": self.servers,
        }
