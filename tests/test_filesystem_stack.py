"""Unit tests for the shared filesystem stack."""

import aws_cdk as cdk
import pytest
from aws_cdk import assertions

from foundry_vtt.config import StackConfig
from foundry_vtt.filesystem_stack import FilesystemStack
from tests.utils import export_names, import_names


@pytest.fixture(scope="module")
def template():
    stack = FilesystemStack(cdk.App(), "TestFilesystemStack", config=StackConfig())
    return assertions.Template.from_stack(stack)


def test_file_system_settings(template):
    template.resource_count_is("AWS::EFS::FileSystem", 1)
    template.has_resource_properties(
        "AWS::EFS::FileSystem",
        {
            "Encrypted": True,
            "LifecyclePolicies": [{"TransitionToIA": "AFTER_14_DAYS"}],
            "PerformanceMode": "generalPurpose",
            "ThroughputMode": "bursting",
        },
    )


def test_mount_only_via_mount_target(template):
    template.has_resource_properties(
        "AWS::EFS::FileSystem",
        {
            "FileSystemPolicy": {
                "Statement": assertions.Match.array_with(
                    [
                        assertions.Match.object_like(
                            {
                                "Action": "elasticfilesystem:ClientMount",
                                "Effect": "Allow",
                                "Principal": {"AWS": "*"},
                                "Condition": {
                                    "Bool": {
                                        "elasticfilesystem:AccessedViaMountTarget": "true"
                                    }
                                },
                            }
                        )
                    ]
                ),
            },
        },
    )


def test_attached_to_imported_network(template):
    assert {
        "Dev-FoundryVtt-vpc-id",
        "Dev-FoundryVtt-vpc-public-subnets",
    } <= set(import_names(template))
    template.resource_count_is("AWS::EC2::VPC", 0)
    template.has_resource_properties(
        "AWS::EC2::SecurityGroup",
        {"VpcId": {"Fn::ImportValue": "Dev-FoundryVtt-vpc-id"}},
    )


def test_one_mount_target_per_public_subnet(template):
    template.resource_count_is("AWS::EFS::MountTarget", 2)
    template.has_resource_properties(
        "AWS::EFS::MountTarget",
        {
            "SubnetId": {
                "Fn::Select": [
                    1,
                    {
                        "Fn::Split": [
                            ",",
                            {"Fn::ImportValue": "Dev-FoundryVtt-vpc-public-subnets"},
                        ]
                    },
                ]
            }
        },
    )


def test_exports(template):
    assert export_names(template) == [
        "Dev-FoundryVtt-efs-id",
        "Dev-FoundryVtt-efs-sg",
    ]
    template.has_output(
        "FileSystemSG",
        {"Value": {"Fn::GetAtt": [assertions.Match.any_value(), "GroupId"]}},
    )


def test_keys_follow_renames():
    config = StackConfig(stage="prod", project="Tabletop")
    stack = FilesystemStack(cdk.App(), "TestFilesystemStack", config=config)
    template = assertions.Template.from_stack(stack)

    names = export_names(template) + import_names(template)
    assert names
    assert all(name.startswith("prod-Tabletop-") for name in names)
