"""
Renderers for computed scanner properties
"""

import json
from typing import Dict, Optional


class BaseReporter:
    """Base class for reporters"""

    def render(self, properties: Dict[str, str]) -> str:
        raise NotImplementedError

    def report(self, properties: Dict[str, str], output: Optional[str] = None) -> str:
        """Render properties and write them to a file or stdout"""
        content = self.render(properties)
        self._write_output(content, output)
        return content

    def _write_output(self, content: str, output: Optional[str]) -> None:
        """Write content to file or stdout"""
        if output:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(content)
        else:
            print(content, end='')


def escape_properties(text: str, is_key: bool = False) -> str:
    """Escape text for a java .properties file"""
    escaped = []
    for i, ch in enumerate(text):
        if ch == '\\':
            escaped.append('\\\\')
        elif ch == '\n':
            escaped.append('\\n')
        elif ch == '\r':
            escaped.append('\\r')
        elif ch == '\t':
            escaped.append('\\t')
        elif ch in '=:#!':
            escaped.append('\\' + ch)
        elif ch == ' ' and (is_key or i == 0):
            escaped.append('\\ ')
        elif ord(ch) > 0x7e:
            # Characters beyond the BMP are written as a UTF-16 surrogate pair
            units = ch.encode('utf-16-be')
            for j in range(0, len(units), 2):
                escaped.append(f'\\u{int.from_bytes(units[j:j + 2], "big"):04x}')
        else:
            escaped.append(ch)
    return ''.join(escaped)


class PropertiesReporter(BaseReporter):
    """sonar-project.properties style output"""

    def render(self, properties: Dict[str, str]) -> str:
        lines = [
            f"{escape_properties(key, is_key=True)}={escape_properties(value)}"
            for key, value in sorted(properties.items())
        ]
        return '\n'.join(lines) + '\n' if lines else ''


class JsonReporter(BaseReporter):
    """JSON object output"""

    def render(self, properties: Dict[str, str]) -> str:
        return json.dumps(properties, indent=2, sort_keys=True) + '\n'


class ArgsReporter(BaseReporter):
    """One -Dkey=value scanner argument per line"""

    def render(self, properties: Dict[str, str]) -> str:
        lines = [f"-D{key}={value}" for key, value in sorted(properties.items())]
        return '\n'.join(lines) + '\n' if lines else ''


REPORTERS = {
    'properties': PropertiesReporter,
    'json': JsonReporter,
    'args': ArgsReporter,
}


def get_reporter(format_name: str) -> BaseReporter:
    """Get reporter instance for format"""
    reporter_class = REPORTERS.get(format_name.lower())
    if reporter_class is None:
        raise ValueError(f"Unknown format: {format_name}. Available: {', '.join(REPORTERS)}")
    return reporter_class()
