"""C++ listing generator. Every pipeline value is a std::string."""
import json
from typing import Any

from ..engine.behaviors import BehaviorKind, NodeType, ai_prefix
from ..engine.graph import Node
from .base import CodeGenerator, one_line, quote
from .registry import GeneratorRegistry


@GeneratorRegistry.register
class CppGenerator(CodeGenerator):
    LANGUAGE = "cpp"
    ALIASES = ("c++", "cxx")
    NULL = 'std::string()'

    def header(self) -> list[str]:
        return [
            "// Matrix IDE Generated C++ Code",
            "#include <iostream>",
            "#include <string>",
            "#include <fstream>",
            "#include <sstream>",
            "#include <algorithm>",
            "#include <stdexcept>",
            "",
            "class MatrixProcessor {",
            "private:",
            "  std::string processData(const std::string& data) {",
            "    std::string result = data;",
            "    result.erase(0, result.find_first_not_of(\" \\t\\n\\r\"));",
            "    result.erase(result.find_last_not_of(\" \\t\\n\\r\") + 1);",
            "    std::transform(result.begin(), result.end(), result.begin(), ::tolower);",
            "    return result;",
            "  }",
            "",
            "  std::string validateInput(const std::string& data) {",
            "    if (data.empty()) {",
            '      throw std::runtime_error("Empty input detected");',
            "    }",
            "    return data;",
            "  }",
            "",
            '  std::string aiEnhance(const std::string& data, const std::string& prefix = "AI_ENHANCED") {',
            '    return prefix + ": " + data;',
            "  }",
            "",
            "  std::string routeValue(const std::string& value, double numberThreshold = 50, std::size_t lengthThreshold = 5) {",
            "    try {",
            "      std::size_t used = 0;",
            "      double number = std::stod(value, &used);",
            "      if (used == value.size()) {",
            '        return number > numberThreshold ? "high" : "low";',
            "      }",
            "    } catch (const std::exception&) {",
            "    }",
            '    return value.size() > lengthThreshold ? "long" : "short";',
            "  }",
            "",
            "  std::string fetchData(const std::string& method, const std::string& url) {",
            '    return "{\\"method\\": \\"" + method + "\\", \\"url\\": \\"" + url + "\\"}";',
            "  }",
            "",
            "  std::string readFile(const std::string& path) {",
            "    std::ifstream in(path);",
            "    std::stringstream buffer;",
            "    buffer << in.rdbuf();",
            "    return buffer.str();",
            "  }",
            "",
            "  std::string render(std::string tpl, const std::string& value) {",
            '    const std::string key = "{result}";',
            "    std::size_t pos = tpl.find(key);",
            "    if (pos != std::string::npos) {",
            "      tpl.replace(pos, key.size(), value);",
            "    }",
            "    return tpl;",
            "  }",
            "",
        ]

    def main_open(self) -> list[str]:
        return ["public:", "  std::string main() {"]

    def main_close(self) -> list[str]:
        return [
            '    return "Execution completed successfully";',
            "  }",
            "};",
            "",
        ]

    def footer(self) -> list[str]:
        return [
            "int main() {",
            "  try {",
            "    MatrixProcessor processor;",
            "    std::string result = processor.main();",
            "    std::cout << result << std::endl;",
            "  } catch (const std::exception& e) {",
            '    std::cerr << "Error: " << e.what() << std::endl;',
            "    return 1;",
            "  }",
            "  return 0;",
            "}",
        ]

    def helper_suffix(self, node: Node) -> str | None:
        if node.type == NodeType.OUTPUT and node.resolved_behavior() == BehaviorKind.FILE_OUTPUT:
            return "file"
        return None

    def literal(self, value: Any) -> str:
        text = value if isinstance(value, str) else json.dumps(value, default=str)
        return f"std::string({quote(text)})"

    def emit_input(self, node: Node, args: list[str], var: str) -> list[str]:
        if node.resolved_behavior() == BehaviorKind.FILE_INPUT:
            path = getattr(node.config, "file_path", "input.txt")
            return [
                f"// {one_line(node.label)} (file input)",
                f"std::string {var} = readFile({quote(path)});",
            ]
        return [
            f"// {one_line(node.label)} (user input)",
            f"std::cout << {quote(node.label + ': ')};",
            f"std::string {var};",
            f"std::getline(std::cin, {var});",
        ]

    def emit_function(self, node: Node, args: list[str], var: str) -> list[str]:
        arg = self.first_arg(args)
        behavior = node.resolved_behavior()
        lines = [f"// {one_line(node.label)} node"]
        if behavior == BehaviorKind.TEXT_PROCESS:
            lines.append(f"std::string {var} = processData({arg});")
        elif behavior == BehaviorKind.VALIDATE:
            lines.append(f"std::string {var} = validateInput({arg});")
        elif behavior == BehaviorKind.AI_ENHANCE:
            prefix = ai_prefix(getattr(node.config, "model", None))
            lines.append(f"std::string {var} = aiEnhance({arg}, {quote(prefix)});")
        else:
            lines.append(f"std::string {var} = {arg};")
        return lines

    def emit_api(self, node: Node, args: list[str], var: str) -> list[str]:
        url = getattr(node.config, "url", "https://api.example.com/data")
        method = getattr(node.config, "method", "GET").upper()
        return [
            f"// {one_line(node.label)} API call",
            f"std::string {var} = fetchData({quote(method)}, {quote(url)});",
        ]

    def emit_logic(self, node: Node, args: list[str], var: str) -> list[str]:
        return [
            f"// {one_line(node.label)} logic",
            f"std::string {var} = routeValue({self.first_arg(args)}, {self.thresholds(node)});",
        ]

    def emit_output(self, node: Node, args: list[str], var: str) -> list[str]:
        value = self.first_arg(args)
        if node.resolved_behavior() == BehaviorKind.FILE_OUTPUT:
            filename = getattr(node.config, "filename", "output.txt")
            out = self.helper_names[node.id]
            return [
                f"// {one_line(node.label)} to file",
                f"std::ofstream {out}({quote(filename)});",
                f"{out} << {value};",
            ]
        template = getattr(node.config, "template", "Result: {result}")
        return [
            f"// {one_line(node.label)}",
            f"std::cout << render({quote(template)}, {value}) << std::endl;",
        ]

    def emit_variable(self, node: Node, args: list[str], var: str) -> list[str]:
        value = getattr(node.config, "value", None)
        source = self.literal(value) if value is not None else self.first_arg(args)
        return [f"// {one_line(node.label)} variable", f"std::string {var} = {source};"]
