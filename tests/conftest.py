"""Shared OpenAPI fixture documents."""

import copy

import pytest


USERS_API = {
    "openapi": "3.0.3",
    "info": {
        "title": "Users API",
        "version": "1.2.0",
        "description": "Users and their posts",
    },
    "servers": [{"url": "https://api.example.com/v1"}],
    "paths": {
        "/users": {
            "get": {
                "operationId": "listUsers",
                "summary": "List users",
                "tags": ["users"],
                "parameters": [
                    {"name": "page", "in": "query", "schema": {"type": "integer"}},
                ],
                "responses": {
                    "200": {
                        "description": "OK",
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "array",
                                    "items": {"$ref": "#/components/schemas/User"},
                                }
                            }
                        },
                    }
                },
            },
            "post": {
                "operationId": "createUser",
                "tags": ["users"],
                "requestBody": {
                    "required": True,
                    "content": {"application/json": {"schema": {"$ref": "#/components/schemas/User"}}},
                },
                "responses": {"201": {"description": "Created"}},
            },
        },
        "/users/{id}": {
            "parameters": [
                {"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}},
            ],
            "get": {
                "operationId": "getUser",
                "tags": ["users"],
                "responses": {
                    "200": {
                        "description": "OK",
                        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/User"}}},
                    }
                },
            },
            "put": {"operationId": "updateUser", "tags": ["users", "admin"], "responses": {"200": {"description": "OK"}}},
            "delete": {"operationId": "deleteUser", "tags": ["admin"], "responses": {"204": {"description": "Gone"}}},
        },
        "/users/{id}/posts": {
            "get": {
                "operationId": "listUserPosts",
                "tags": ["posts"],
                "responses": {
                    "200": {
                        "description": "OK",
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "object",
                                    "properties": {
                                        "data": {
                                            "type": "array",
                                            "items": {"$ref": "#/components/schemas/Post"},
                                        },
                                        "total": {"type": "integer"},
                                    },
                                }
                            }
                        },
                    }
                },
            }
        },
        "/posts": {
            "get": {
                "operationId": "listPosts",
                "tags": ["posts"],
                "responses": {
                    "200": {
                        "description": "OK",
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "array",
                                    "items": {"$ref": "#/components/schemas/Post"},
                                }
                            }
                        },
                    }
                },
            }
        },
    },
    "components": {
        "schemas": {
            "User": {
                "type": "object",
                "required": ["name", "email"],
                "properties": {
                    "id": {"type": "integer"},
                    "name": {"type": "string", "example": "Ada"},
                    "email": {"type": "string", "format": "email"},
                    "active": {"type": "boolean", "default": True},
                    "createdAt": {"type": "string", "format": "date-time"},
                    "profile": {"$ref": "#/components/schemas/Profile"},
                },
            },
            "Profile": {
                "type": "object",
                "properties": {
                    "bio": {"type": "string", "maxLength": 500},
                },
            },
            "Post": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer"},
                    "title": {"type": "string"},
                    "author": {"$ref": "#/components/schemas/User"},
                },
            },
        }
    },
}


STATS_API = {
    "openapi": "3.0.0",
    "info": {"title": "Stats API", "version": "1.0"},
    "paths": {
        "/users": {
            "get": {"responses": {"200": {"description": "OK"}}},
            "post": {"responses": {"201": {"description": "Created"}}},
        },
        "/users/{id}": {
            "get": {"responses": {"200": {"description": "OK"}}},
            "put": {"responses": {"200": {"description": "OK"}}},
        },
        "/posts": {
            "get": {"responses": {"200": {"description": "OK"}}},
        },
        "/auth/login": {
            "post": {"responses": {"200": {"description": "OK"}}},
        },
    },
}


SWAGGER_API = {
    "swagger": "2.0",
    "info": {"title": "Pet Store", "version": "1.0.0"},
    "host": "petstore.example.com",
    "basePath": "/api",
    "schemes": ["https"],
    "paths": {
        "/pets": {
            "get": {
                "parameters": [
                    {"name": "limit", "in": "query", "type": "integer", "format": "int32"},
                ],
                "responses": {
                    "200": {
                        "description": "OK",
                        "schema": {
                            "type": "object",
                            "properties": {
                                "results": {"type": "array", "items": {"$ref": "#/definitions/Pet"}},
                                "count": {"type": "integer"},
                            },
                        },
                    }
                },
            },
            "post": {
                "parameters": [
                    {"name": "pet", "in": "body", "required": True, "schema": {"$ref": "#/definitions/Pet"}},
                ],
                "responses": {"201": {"description": "Created"}},
            },
        },
        "/pets/{petId}": {
            "get": {
                "parameters": [
                    {"name": "petId", "in": "path", "required": True, "type": "string"},
                ],
                "responses": {"200": {"description": "OK", "schema": {"$ref": "#/definitions/Pet"}}},
            }
        },
    },
    "definitions": {
        "Pet": {
            "type": "object",
            "required": ["name"],
            "properties": {
                "id": {"type": "integer"},
                "name": {"type": "string"},
                "tag": {"type": "string"},
            },
        }
    },
}


@pytest.fixture
def users_api():
    """OpenAPI 3 document with nested users/posts resources"""
    return copy.deepcopy(USERS_API)


@pytest.fixture
def stats_api():
    """Minimal document for statistics"""
    return copy.deepcopy(STATS_API)


@pytest.fixture
def swagger_api():
    """Swagger 2.0 document"""
    return copy.deepcopy(SWAGGER_API)


def contains_ref(value):
    """True if a $ref key appears anywhere in a nested structure"""
    if isinstance(value, dict):
        return "$ref" in value or any(contains_ref(item) for item in value.values())
    if isinstance(value, list):
        return any(contains_ref(item) for item in value)
    return False
