"""Output directory and program file management utilities."""
import os


def create_output_directory(base_path: str) -> str:
    """
    Create the output directory for generated programs.

    Args:
        base_path: Directory path

    Returns:
        The directory path
    """
    os.makedirs(base_path, exist_ok=True)
    return base_path


def build_output_path(output: str, output_dir: str) -> str:
    """
    Resolve where a program is written.

    Bare file names go into output_dir; anything with a directory part is
    used as given.

    Args:
        output: File name or path given by the user
        output_dir: Default output directory

    Returns:
        Path to write to
    """
    if os.path.dirname(output):
        return output
    return os.path.join(output_dir, output)


def write_program_file(file_path: str, content: str, overwrite: bool = False) -> str:
    """
    Write a G-code program.

    Args:
        file_path: Destination path
        content: Program text
        overwrite: Replace an existing file instead of refusing

    Returns:
        Full path to the written file

    Raises:
        FileExistsError: If the file exists and overwrite is False
    """
    directory = os.path.dirname(file_path)
    if directory:
        create_output_directory(directory)

    mode = 'w' if overwrite else 'x'
    with open(file_path, mode) as f:
        f.write(content)
    return file_path

