import aws_cdk as cdk
from aws_cdk import aws_ec2 as ec2

from foundry_vtt.config import StackConfig
from foundry_vtt.exports import ExportKey, ExportRegistry


class NetworkStack(cdk.Stack):

    def __init__(self, scope, construct_id, config: StackConfig, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)
        config.apply_tags(self)
        registry = ExportRegistry(config)

        # VPC, public subnets only
        self.vpc = ec2.Vpc(
            self,
            "VPC",
            max_azs=config.max_azs,
            nat_gateways=0,
            subnet_configuration=[
                ec2.SubnetConfiguration(
                    name="public",
                    subnet_type=ec2.SubnetType.PUBLIC,
                    cidr_mask=24,
                    map_public_ip_on_launch=True,
                ),
            ],
        )

        registry.export(
            self, "VPCID", ExportKey.VPC_ID, self.vpc.vpc_id, "VPC ID"
        )
        registry.export_list(
            self,
            "VPCAvailabilityZones",
            ExportKey.VPC_AZS,
            self.vpc.availability_zones,
            "VPC Availability Zones",
        )
        registry.export_list(
            self,
            "VPCPublicSubnets",
            ExportKey.VPC_PUBLIC_SUBNETS,
            [subnet.subnet_id for subnet in self.vpc.public_subnets],
            "VPC Public Subnets",
        )
