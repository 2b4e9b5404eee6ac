from aws_cdk import assertions


def export_names(template: assertions.Template) -> list[str]:
    return sorted(
        output["Export"]["Name"]
        for output in template.find_outputs("*").values()
        if "Export" in output
    )


def import_names(template: assertions.Template) -> list[str]:
    """Every Fn::ImportValue name referenced anywhere in the template."""
    found = []

    def walk(node):
        if isinstance(node, dict):
            for key, value in node.items():
                if key == "Fn::ImportValue" and isinstance(value, str):
                    found.append(value)
                else:
                    walk(value)
        elif isinstance(node, list):
            for item in node:
                walk(item)

    walk(template.to_json())
    return sorted(set(found))
