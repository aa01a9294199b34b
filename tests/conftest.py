"""Shared fixtures: small in-memory service-spec snapshots."""

import copy

import pytest

from cdk_schema_generator.database import SpecDatabase

S3_SNAPSHOT = {
    "service": [
        {"$id": "svc-s3", "name": "aws-s3", "cloudFormationNamespace": "AWS::S3"},
    ],
    "resource": [
        {
            "$id": "res-bucket",
            "name": "Bucket",
            "cloudFormationType": "AWS::S3::Bucket",
            "attributes": {"Arn": {"type": {"type": "string"}}},
            "properties": {
                "BucketName": {"type": {"type": "string"}, "required": True},
            },
        },
    ],
    "typeDefinition": [],
    "relationships": {"hasResource": [{"from": "svc-s3", "to": "res-bucket"}]},
}

NESTED_SNAPSHOT = {
    "service": [
        {"$id": "svc-s3", "name": "aws-s3", "cloudFormationNamespace": "AWS::S3"},
        {
            "$id": "svc-lambda",
            "name": "aws-lambda",
            "cloudFormationNamespace": "AWS::Lambda",
        },
    ],
    "resource": [
        {
            "$id": "res-bucket",
            "name": "Bucket",
            "cloudFormationType": "AWS::S3::Bucket",
            "attributes": {"Arn": {"type": {"type": "string"}}},
            "properties": {
                "CorsConfiguration": {
                    "type": {"type": "ref", "reference": {"$ref": "td-cors"}},
                },
                "Tags": {"type": {"type": "array", "element": {"type": "tag"}}},
            },
        },
        {
            "$id": "res-function",
            "name": "Function",
            "cloudFormationType": "AWS::Lambda::Function",
            "attributes": {},
            "properties": {
                "Code": {
                    "type": {"type": "ref", "reference": {"$ref": "td-code"}},
                    "required": True,
                },
                "Timeout": {
                    "type": {"type": "integer"},
                    "previousTypes": [{"type": "string"}, {"type": "json"}],
                },
            },
        },
    ],
    "typeDefinition": [
        {
            "$id": "td-cors",
            "name": "CorsConfiguration",
            "properties": {
                "CorsRules": {
                    "type": {
                        "type": "array",
                        "element": {"type": "ref", "reference": {"$ref": "td-rule"}},
                    },
                    "required": True,
                },
            },
        },
        {
            "$id": "td-rule",
            "name": "CorsRule",
            "properties": {
                "AllowedMethods": {
                    "type": {"type": "array", "element": {"type": "string"}},
                },
                "MaxAge": {"type": {"type": "integer"}},
            },
        },
        {
            "$id": "td-code",
            "name": "Code",
            "properties": {"S3Bucket": {"type": {"type": "string"}}},
        },
    ],
    "relationships": {
        "hasResource": [
            {"from": "svc-s3", "to": "res-bucket"},
            {"from": "svc-lambda", "to": "res-function"},
        ]
    },
}


@pytest.fixture
def s3_snapshot():
    return copy.deepcopy(S3_SNAPSHOT)


@pytest.fixture
def nested_snapshot():
    return copy.deepcopy(NESTED_SNAPSHOT)


@pytest.fixture
def s3_db(s3_snapshot):
    return SpecDatabase.from_dict(s3_snapshot)


@pytest.fixture
def nested_db(nested_snapshot):
    return SpecDatabase.from_dict(nested_snapshot)
