"""Python listing generator."""
from typing import Any

from ..engine.behaviors import BehaviorKind, NodeType, ai_prefix
from ..engine.graph import Node
from .base import CodeGenerator, one_line, quote
from .registry import GeneratorRegistry


@GeneratorRegistry.register
class PythonGenerator(CodeGenerator):
    LANGUAGE = "python"
    ALIASES = ("py", "python3")
    NULL = "None"

    def header(self) -> list[str]:
        return [
            "# Matrix IDE Generated Python Code",
            "import sys",
            "import json",
            "from typing import Any",
            "",
            "def process_data(data: Any) -> Any:",
            '    """Transform and process input data"""',
            "    if isinstance(data, str):",
            "        return data.strip().lower()",
            "    return data",
            "",
            "def validate_input(data: Any) -> Any:",
            '    """Validate processed data"""',
            "    if not data:",
            '        raise ValueError("Empty input detected")',
            "    return data",
            "",
            "def ai_enhance(data: Any, prefix: str = \"AI_ENHANCED\") -> Any:",
            '    """AI processing enhancement"""',
            '    return f"{prefix}: {data}"',
            "",
            "def route_value(value: Any, number_threshold: float = 50, length_threshold: int = 5) -> str:",
            '    """Classify a value for conditional routing"""',
            "    if isinstance(value, (int, float)) and not isinstance(value, bool):",
            '        return "high" if value > number_threshold else "low"',
            "    if isinstance(value, str):",
            '        return "long" if len(value) > length_threshold else "short"',
            '    return "truthy" if value else "falsy"',
            "",
        ]

    def main_open(self) -> list[str]:
        return ["def main():", '    """Main execution function"""']

    def main_close(self) -> list[str]:
        return ['    return "Execution completed successfully"', ""]

    def footer(self) -> list[str]:
        return [
            'if __name__ == "__main__":',
            "    try:",
            "        result = main()",
            "        print(result)",
            "    except Exception as e:",
            '        print(f"Error: {e}")',
            "        sys.exit(1)",
        ]

    def helper_suffix(self, node: Node) -> str | None:
        return "response" if node.type == NodeType.API else None

    def literal(self, value: Any) -> str:
        return repr(value)

    def emit_input(self, node: Node, args: list[str], var: str) -> list[str]:
        if node.resolved_behavior() == BehaviorKind.FILE_INPUT:
            path = getattr(node.config, "file_path", "input.txt")
            return [
                f"# {one_line(node.label)} (file input)",
                f"with open({quote(path)}, 'r') as f:",
                f"    {var} = f.read()",
            ]
        return [
            f"# {one_line(node.label)} (user input)",
            f"{var} = input({quote(node.label + ': ')})",
        ]

    def emit_function(self, node: Node, args: list[str], var: str) -> list[str]:
        arg = self.first_arg(args)
        behavior = node.resolved_behavior()
        lines = [f"# {one_line(node.label)} node"]
        if behavior == BehaviorKind.TEXT_PROCESS:
            lines.append(f"{var} = process_data({arg})")
        elif behavior == BehaviorKind.VALIDATE:
            lines.append(f"{var} = validate_input({arg})")
        elif behavior == BehaviorKind.AI_ENHANCE:
            prefix = ai_prefix(getattr(node.config, "model", None))
            lines.append(f"{var} = ai_enhance({arg}, {quote(prefix)})")
        elif len(args) > 1:
            lines.append(f"{var} = ({', '.join(args)})")
        else:
            lines.append(f"{var} = {arg}")
        return lines

    def emit_api(self, node: Node, args: list[str], var: str) -> list[str]:
        url = getattr(node.config, "url", "https://api.example.com/data")
        method = getattr(node.config, "method", "GET").upper()
        response = self.helper_names[node.id]
        return [
            f"# {one_line(node.label)} API call",
            "import requests",
            f"{response} = requests.request({quote(method)}, {quote(url)})",
            f"{var} = {response}.json()",
        ]

    def emit_logic(self, node: Node, args: list[str], var: str) -> list[str]:
        return [
            f"# {one_line(node.label)} logic",
            f"{var} = route_value({self.first_arg(args)}, {self.thresholds(node)})",
        ]

    def emit_output(self, node: Node, args: list[str], var: str) -> list[str]:
        value = self.first_arg(args)
        if node.resolved_behavior() == BehaviorKind.FILE_OUTPUT:
            filename = getattr(node.config, "filename", "output.txt")
            return [
                f"# {one_line(node.label)} to file",
                f"with open({quote(filename)}, 'w') as f:",
                f"    f.write(str({value}))",
            ]
        template = getattr(node.config, "template", "Result: {result}")
        return [
            f"# {one_line(node.label)}",
            f'print({quote(template)}.replace("{{result}}", str({value})))',
        ]

    def emit_variable(self, node: Node, args: list[str], var: str) -> list[str]:
        value = getattr(node.config, "value", None)
        source = self.literal(value) if value is not None else self.first_arg(args)
        return [f"# {one_line(node.label)} variable", f"{var} = {source}"]
