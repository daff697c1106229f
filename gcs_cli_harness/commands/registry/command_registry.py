from typing import Any, Dict, List, Type
import logging
from gcs_cli_harness.commands.interfaces.command import Command
from gcs_cli_harness.commands.interfaces.command_context import CommandContext


logger = logging.getLogger(__name__)


class CommandRegistry:
    """
    Registry for building command instances from a shared context.

    The CommandRegistry acts as a factory: every command it creates receives
    the same immutable CommandContext, so executor, bucket and signing
    configuration are injected in one place.

    Usage:
        registry = CommandRegistry(context)
        du = registry.create_command("du")
        sizes = await du.execute("gs://bucket/file.txt")
    """

    def __init__(self, context: CommandContext):
        """
        Initialize command registry with the shared context.

        Args:
            context: Construction-time configuration for every command
        """
        logger.info(f"Initializing CommandRegistry for bucket {context.bucket_name}")

        self._context = context

        # Registry of command classes keyed by command name
        self._command_classes: Dict[str, Type[Command[Any]]] = {}

        self._setup_commands()

    @property
    def context(self) -> CommandContext:
        return self._context

    def _setup_commands(self) -> None:
        """Register the built-in gsutil / gcloud commands"""
        # Imported here to keep interfaces free of implementation imports
        from gcs_cli_harness.commands.impl.cat_command import CatCommand
        from gcs_cli_harness.commands.impl.du_command import DuCommand
        from gcs_cli_harness.commands.impl.rm_command import RmCommand
        from gcs_cli_harness.commands.impl.sign_url_command import SignUrlCommand

        self._register_command_class(DuCommand)
        self._register_command_class(CatCommand)
        self._register_command_class(RmCommand)
        self._register_command_class(SignUrlCommand)

        logger.info(
            f"Registered {len(self._command_classes)} command classes: "
            f"{list(self._command_classes.keys())}"
        )

    def _register_command_class(self, command_class: Type[Command[Any]]) -> str:
        """Register a command class in the registry and return its name"""
        # Create temporary instance to get command name
        temp_instance = command_class(self._context)
        command_name = temp_instance.get_command_name()

        if command_name in self._command_classes:
            logger.warning(f"Command '{command_name}' already registered, overriding")

        self._command_classes[command_name] = command_class
        logger.debug(f"Registered command class: {command_name}")
        return command_name

    def create_command(self, command_name: str) -> Command[Any]:
        """
        Create a command instance bound to the registry context.

        Args:
            command_name: Name of the command to create

        Returns:
            Command instance

        Raises:
            ValueError: If command_name is not registered
        """
        if command_name not in self._command_classes:
            available_commands = list(self._command_classes.keys())
            raise ValueError(
                f"Command '{command_name}' not found. Available commands: {available_commands}"
            )

        command = self._command_classes[command_name](self._context)
        logger.debug(f"Created command instance: {command_name}")
        return command

    def get_available_commands(self) -> List[str]:
        """
        Get list of all registered command names.

        Returns:
            List of available command names
        """
        return list(self._command_classes.keys())

    def get_command_info(self, command_name: str) -> Dict[str, Any]:
        """
        Get information about a specific command.

        Args:
            command_name: Name of the command

        Returns:
            Dictionary containing command information

        Raises:
            ValueError: If command_name is not registered
        """
        if command_name not in self._command_classes:
            raise ValueError(f"Command '{command_name}' not found")

        command_class = self._command_classes[command_name]
        return {
            "name": command_name,
            "class": command_class.__name__,
            "bucket_name": self._context.bucket_name,
            "timeout_seconds": self._context.timeout_seconds,
        }

    def add_command_class(self, command_class: Type[Command[Any]]) -> None:
        """
        Add a new command class to the registry at runtime.

        Args:
            command_class: Command class to add

        Raises:
            ValueError: If command with same name already exists
        """
        temp_instance = command_class(self._context)
        command_name = temp_instance.get_command_name()

        if command_name in self._command_classes:
            raise ValueError(f"Command '{command_name}' already exists")

        self._register_command_class(command_class)
        logger.info(f"Added new command class: {command_name}")

    def remove_command_class(self, command_name: str) -> bool:
        """
        Remove a command class from the registry.

        Args:
            command_name: Name of command to remove

        Returns:
            True if command was removed, False if not found
        """
        if command_name not in self._command_classes:
            return False

        del self._command_classes[command_name]
        logger.info(f"Removed command class: {command_name}")
        return True
