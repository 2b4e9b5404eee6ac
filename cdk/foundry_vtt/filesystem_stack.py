import aws_cdk as cdk

from foundry_vtt.config import StackConfig
from foundry_vtt.exports import ExportKey, ExportRegistry
from foundry_vtt.resources import create_file_system


class FilesystemStack(cdk.Stack):
    """Shared EFS for Foundry data, attached to the exported network."""

    def __init__(self, scope, construct_id, config: StackConfig, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)
        config.apply_tags(self)
        registry = ExportRegistry(config)

        self.vpc = registry.import_vpc(self, "VPC")
        self.file_system = create_file_system(self, self.vpc)

        registry.export(
            self,
            "FileSystemId",
            ExportKey.EFS_ID,
            self.file_system.file_system_id,
            "EFS FileSystem ID",
        )
        registry.export(
            self,
            "FileSystemSG",
            ExportKey.EFS_SG,
            self.file_system.connections.security_groups[0].security_group_id,
            "EFS FileSystem Security Group",
        )
