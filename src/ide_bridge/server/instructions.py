"""Agent-facing instructions sent in the MCP initialize response.

They state the escalation order of the build tools. The order is advisory:
nothing in the bridge refuses an out-of-order call.
"""

INSTRUCTIONS_EN = """\
### Build & Validation Tools

Execute in order: **FileProblems -> FileBuild -> MavenCompile**

Every step is mandatory. Do not skip any.

**Tools:**
- `FileProblems`: Syntax check (unterminated literals, unbalanced brackets) - instant feedback
- `FileBuild`: Incremental build of modified files - seconds
- `MavenCompile`: Maven offline build - minutes (final validation)

**NEVER use a shell to run `mvn compile` or `gradle build`. ALWAYS use these tools.**

**Execution Order (mandatory):**

1. Call `FileProblems` to check for syntax issues
2. Call `FileBuild` to run the incremental compiler
3. Call `MavenCompile` to run Maven validation

**If any step fails, fix errors and restart from step 1.**"""

INSTRUCTIONS_ZH = """\
### 构建与验证工具

按顺序执行：**FileProblems -> FileBuild -> MavenCompile**

每一步都必须执行，不能跳过。

**工具说明：**
- `FileProblems`：语法检查（未闭合的字面量、括号不匹配）- 即时反馈
- `FileBuild`：增量编译已修改的文件 - 秒级
- `MavenCompile`：Maven 离线构建 - 分钟级（最终验证）

**禁止使用命令行执行 `mvn compile` 或 `gradle build`。必须使用这些工具。**

**执行顺序（必须遵守）：**

1. 调用 `FileProblems` 检查语法问题
2. 调用 `FileBuild` 运行增量编译
3. 调用 `MavenCompile` 运行 Maven 验证

**任何步骤失败，都需修复后从步骤 1 重新开始。**"""

WSL_APPENDIX_EN = """\
**Paths:** the project lives on a Windows drive. Pass paths as `/mnt/<drive>/...`;
results are reported the same way."""

WSL_APPENDIX_ZH = """\
**路径：** 项目位于 Windows 磁盘上。请使用 `/mnt/<盘符>/...` 形式传入路径，
结果中的路径也会以相同形式返回。"""

_INSTRUCTIONS = {"en": INSTRUCTIONS_EN, "zh": INSTRUCTIONS_ZH}
_WSL_APPENDICES = {"en": WSL_APPENDIX_EN, "zh": WSL_APPENDIX_ZH}


def get_instructions(language: str = "en", wsl_mode: bool = False) -> str:
    """Return the build-tool instructions in `language` (unknown languages fall back to English)."""
    text = _INSTRUCTIONS.get(language, INSTRUCTIONS_EN)
    if wsl_mode:
        text = f"{text}\n\n{_WSL_APPENDICES.get(language, WSL_APPENDIX_EN)}"
    return text
