"""JavaScript (Node.js) listing generator."""
import json
from typing import Any

from ..engine.behaviors import BehaviorKind, NodeType, ai_prefix
from ..engine.graph import Node
from .base import CodeGenerator, one_line, quote
from .registry import GeneratorRegistry


@GeneratorRegistry.register
class JavaScriptGenerator(CodeGenerator):
    LANGUAGE = "javascript"
    ALIASES = ("js", "node")
    BODY_INDENT = "    "
    NULL = "null"

    def header(self) -> list[str]:
        return [
            "// Matrix IDE Generated JavaScript Code",
            'const fs = require("fs");',
            'const readline = require("readline");',
            "",
            "class MatrixProcessor {",
            "  constructor() {",
            "    this.rl = readline.createInterface({",
            "      input: process.stdin,",
            "      output: process.stdout",
            "    });",
            "  }",
            "",
            "  async processData(data) {",
            '    if (typeof data === "string") {',
            "      return data.trim().toLowerCase();",
            "    }",
            "    return data;",
            "  }",
            "",
            "  validateInput(data) {",
            "    if (!data) {",
            '      throw new Error("Empty input detected");',
            "    }",
            "    return data;",
            "  }",
            "",
            '  aiEnhance(data, prefix = "AI_ENHANCED") {',
            "    return `${prefix}: ${data}`;",
            "  }",
            "",
            "  routeValue(value, numberThreshold = 50, lengthThreshold = 5) {",
            '    if (typeof value === "number") {',
            '      return value > numberThreshold ? "high" : "low";',
            "    }",
            '    if (typeof value === "string") {',
            '      return value.length > lengthThreshold ? "long" : "short";',
            "    }",
            '    return value ? "truthy" : "falsy";',
            "  }",
            "",
            "  getUserInput(prompt) {",
            "    return new Promise((resolve) => {",
            "      this.rl.question(prompt, (answer) => {",
            "        resolve(answer);",
            "      });",
            "    });",
            "  }",
            "",
        ]

    def main_open(self) -> list[str]:
        return ["  async main() {"]

    def main_close(self) -> list[str]:
        return [
            "    this.rl.close();",
            '    return "Execution completed successfully";',
            "  }",
            "}",
            "",
        ]

    def footer(self) -> list[str]:
        return [
            "// Execute the processor",
            "const processor = new MatrixProcessor();",
            "processor.main()",
            "  .then(result => console.log(result))",
            '  .catch(error => console.error("Error:", error));',
        ]

    def helper_suffix(self, node: Node) -> str | None:
        return "response" if node.type == NodeType.API else None

    def literal(self, value: Any) -> str:
        return json.dumps(value, ensure_ascii=False, default=str)

    def emit_input(self, node: Node, args: list[str], var: str) -> list[str]:
        if node.resolved_behavior() == BehaviorKind.FILE_INPUT:
            path = getattr(node.config, "file_path", "input.txt")
            return [
                f"// {one_line(node.label)} (file input)",
                f'const {var} = fs.readFileSync({quote(path)}, "utf8");',
            ]
        return [
            f"// {one_line(node.label)} (user input)",
            f"const {var} = await this.getUserInput({quote(node.label + ': ')});",
        ]

    def emit_function(self, node: Node, args: list[str], var: str) -> list[str]:
        arg = self.first_arg(args)
        behavior = node.resolved_behavior()
        lines = [f"// {one_line(node.label)} node"]
        if behavior == BehaviorKind.TEXT_PROCESS:
            lines.append(f"const {var} = await this.processData({arg});")
        elif behavior == BehaviorKind.VALIDATE:
            lines.append(f"const {var} = this.validateInput({arg});")
        elif behavior == BehaviorKind.AI_ENHANCE:
            prefix = ai_prefix(getattr(node.config, "model", None))
            lines.append(f"const {var} = this.aiEnhance({arg}, {quote(prefix)});")
        elif len(args) > 1:
            lines.append(f"const {var} = [{', '.join(args)}];")
        else:
            lines.append(f"const {var} = {arg};")
        return lines

    def emit_api(self, node: Node, args: list[str], var: str) -> list[str]:
        url = getattr(node.config, "url", "https://api.example.com/data")
        method = getattr(node.config, "method", "GET").upper()
        response = self.helper_names[node.id]
        return [
            f"// {one_line(node.label)} API call",
            f"const {response} = await fetch({quote(url)}, {{ method: {quote(method)} }});",
            f"const {var} = await {response}.json();",
        ]

    def emit_logic(self, node: Node, args: list[str], var: str) -> list[str]:
        return [
            f"// {one_line(node.label)} logic",
            f"const {var} = this.routeValue({self.first_arg(args)}, {self.thresholds(node)});",
        ]

    def emit_output(self, node: Node, args: list[str], var: str) -> list[str]:
        value = self.first_arg(args)
        if node.resolved_behavior() == BehaviorKind.FILE_OUTPUT:
            filename = getattr(node.config, "filename", "output.txt")
            return [
                f"// {one_line(node.label)} to file",
                f"fs.writeFileSync({quote(filename)}, String({value}));",
            ]
        template = getattr(node.config, "template", "Result: {result}")
        return [
            f"// {one_line(node.label)}",
            f'console.log({quote(template)}.replace("{{result}}", String({value})));',
        ]

    def emit_variable(self, node: Node, args: list[str], var: str) -> list[str]:
        value = getattr(node.config, "value", None)
        source = self.literal(value) if value is not None else self.first_arg(args)
        return [f"// {one_line(node.label)} variable", f"const {var} = {source};"]
