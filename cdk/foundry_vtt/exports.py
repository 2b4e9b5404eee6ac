from enum import Enum

import aws_cdk as cdk
from aws_cdk import (
    aws_ec2 as ec2,
    aws_efs as efs,
)
from constructs import Construct

from foundry_vtt.config import StackConfig


LIST_DELIMITER = ","


class ExportKey(Enum):
    """Suffixes of the values stacks publish for each other."""

    VPC_ID = "vpc-id"
    VPC_AZS = "vpc-azs"
    VPC_PUBLIC_SUBNETS = "vpc-public-subnets"
    EFS_ID = "efs-id"
    EFS_SG = "efs-sg"
    RESOURCE_GROUP = "resource-group"
    CLOUDFRONT_DOMAIN_NAME = "cloudfront-domain-name"


class ExportRegistry:
    """Names, publishes and reads the stage/project scoped CloudFormation exports.

    Stacks never share construct references; a producer exports a value under
    ``{stage}-{project}-{suffix}`` and a consumer imports it by the same name.
    All names are derived here.
    """

    def __init__(self, config: StackConfig) -> None:
        self.config = config

    def name(self, key: ExportKey) -> str:
        return f"{self.config.prefix}-{key.value}"

    def names(self) -> dict[ExportKey, str]:
        return {key: self.name(key) for key in ExportKey}

    def export(
        self,
        scope: Construct,
        construct_id: str,
        key: ExportKey,
        value: str,
        description: str,
    ) -> cdk.CfnOutput:
        return cdk.CfnOutput(
            scope,
            construct_id,
            value=value,
            description=description,
            export_name=self.name(key),
        )

    def export_list(
        self,
        scope: Construct,
        construct_id: str,
        key: ExportKey,
        values: list[str],
        description: str,
    ) -> cdk.CfnOutput:
        return self.export(
            scope,
            construct_id,
            key,
            cdk.Fn.join(LIST_DELIMITER, values),
            description,
        )

    def import_value(self, key: ExportKey) -> str:
        return cdk.Fn.import_value(self.name(key))

    def import_list(self, key: ExportKey, assumed_length: int) -> list[str]:
        # Without an assumed length the list stays a single opaque token
        return cdk.Fn.split(
            LIST_DELIMITER, self.import_value(key), assumed_length=assumed_length
        )

    def import_vpc(self, scope: Construct, construct_id: str) -> ec2.IVpc:
        return ec2.Vpc.from_vpc_attributes(
            scope,
            construct_id,
            vpc_id=self.import_value(ExportKey.VPC_ID),
            availability_zones=self.import_list(
                ExportKey.VPC_AZS, self.config.max_azs
            ),
            public_subnet_ids=self.import_list(
                ExportKey.VPC_PUBLIC_SUBNETS, self.config.max_azs
            ),
        )

    def import_file_system(
        self, scope: Construct, construct_id: str
    ) -> efs.IFileSystem:
        security_group = ec2.SecurityGroup.from_security_group_id(
            scope,
            f"{construct_id}SecurityGroup",
            self.import_value(ExportKey.EFS_SG),
        )
        return efs.FileSystem.from_file_system_attributes(
            scope,
            construct_id,
            file_system_id=self.import_value(ExportKey.EFS_ID),
            security_group=security_group,
        )
