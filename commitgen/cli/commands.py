"""CLI Commands"""

import os

from commitgen.config import MODEL_ENV_VAR, get_config_path, load_config
from commitgen.lang import LANG_ENV_VAR
from commitgen.llm import available_clients
from commitgen.llm.claude import API_KEY_ENV_VAR
from commitgen.output import bold, dim, info


def display_config() -> int:
    """Display current configuration and which backends are usable."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .commitgenrc found)")

    overrides = [(name, os.environ.get(name)) for name in (LANG_ENV_VAR, MODEL_ENV_VAR)]
    overrides = [(name, value) for name, value in overrides if value]
    if overrides:
        print(f"  {dim('Environment overrides:')}")
        for name, value in overrides:
            print(f"    {name}={value}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    model:          {info(config.model or 'default')}")
    print(f"    cli_command:    {info(config.cli_command)}")
    print(f"    max_diff_chars: {info(str(config.max_diff_chars))}")
    print(f"    temperature:    {info(str(config.temperature))}")

    clients = available_clients(config)
    print(f"\n  {bold('Backends (in order of use):')}")
    if clients:
        for client in clients:
            print(f"    {info(client.name)}")
    else:
        print(f"    {dim(f'none - set {API_KEY_ENV_VAR} or install the claude CLI')}")

    print(f"\n  {dim('Config locations:')}")
    print("    Local:  .commitgenrc (in current directory)")
    print("    Global: ~/.commitgenrc\n")

    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')

    print(f"\n{bold('Tab Completion Setup')}\n")

    line = 'eval "$(register-python-argcomplete commitgen)"'
    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif 'fish' in shell:
        print("Run:\n")
        print("  register-python-argcomplete --shell fish commitgen | source")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish commitgen | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
