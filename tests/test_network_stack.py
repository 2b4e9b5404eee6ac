"""Unit tests for the network stack."""

import aws_cdk as cdk
import pytest
from aws_cdk import assertions

from foundry_vtt.config import StackConfig
from foundry_vtt.network_stack import NetworkStack
from tests.utils import export_names


@pytest.fixture(scope="module")
def template():
    stack = NetworkStack(cdk.App(), "TestNetworkStack", config=StackConfig())
    return assertions.Template.from_stack(stack)


def test_public_subnets_only(template):
    template.resource_count_is("AWS::EC2::VPC", 1)
    template.resource_count_is("AWS::EC2::Subnet", 2)
    template.resource_count_is("AWS::EC2::NatGateway", 0)
    template.has_resource_properties(
        "AWS::EC2::Subnet", {"MapPublicIpOnLaunch": True}
    )


def test_exports(template):
    assert export_names(template) == [
        "Dev-FoundryVtt-vpc-azs",
        "Dev-FoundryVtt-vpc-id",
        "Dev-FoundryVtt-vpc-public-subnets",
    ]
    template.has_output(
        "VPCID",
        {
            "Description": "VPC ID",
            "Value": {"Ref": assertions.Match.any_value()},
            "Export": {"Name": "Dev-FoundryVtt-vpc-id"},
        },
    )


def test_lists_are_comma_joined(template):
    template.has_output(
        "VPCPublicSubnets",
        {"Value": {"Fn::Join": [",", assertions.Match.any_value()]}},
    )
    template.has_output(
        "VPCAvailabilityZones",
        {"Value": {"Fn::Join": [",", assertions.Match.any_value()]}},
    )


def test_tagged_with_project_and_stage(template):
    template.has_resource_properties(
        "AWS::EC2::VPC",
        {"Tags": assertions.Match.array_with([{"Key": "project", "Value": "FoundryVtt"}])},
    )
    template.has_resource_properties(
        "AWS::EC2::VPC",
        {"Tags": assertions.Match.array_with([{"Key": "stage", "Value": "Dev"}])},
    )


def test_max_azs_follows_config():
    config = StackConfig(max_azs=3, account="123456789012", region="us-east-1")
    stack = NetworkStack(
        cdk.App(), "TestNetworkStack", config=config, env=config.environment
    )
    template = assertions.Template.from_stack(stack)

    template.resource_count_is("AWS::EC2::Subnet", 3)


@pytest.mark.parametrize("stage,project", [("prod", "Tabletop"), ("dev", "Vtt")])
def test_exports_follow_renames(stage, project):
    config = StackConfig(stage=stage, project=project)
    stack = NetworkStack(cdk.App(), "TestNetworkStack", config=config)

    assert export_names(assertions.Template.from_stack(stack)) == [
        f"{stage}-{project}-vpc-azs",
        f"{stage}-{project}-vpc-id",
        f"{stage}-{project}-vpc-public-subnets",
    ]
