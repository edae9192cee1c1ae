"""
Build script for the CHIP-8 Emulator
Compiles the project into a standalone executable using PyInstaller.
"""

import subprocess
import sys
import os
import shutil

def main():
    print("=" * 50)
    print("Building CHIP-8 Emulator Executable")
    print("=" * 50)

    # Ensure PyInstaller is installed
    try:
        import PyInstaller
    except ImportError:
        print("Installing PyInstaller...")
        subprocess.check_call([sys.executable, "-m", "pip", "install", "pyinstaller"])

    # Clean previous builds
    for folder in ['build', 'dist']:
        if os.path.exists(folder):
            print(f"Cleaning {folder}/...")
            try:
                shutil.rmtree(folder)
            except PermissionError:
                print(f"Warning: Could not clean {folder}/ - file may be in use")

    if os.path.exists("Chip8.spec"):
        os.remove("Chip8.spec")

    # Not needed at runtime
    excludes = [
        'tkinter',
        'pytest',
        'numba.cuda',
        'llvmlite.tests',
    ]

    exclude_args = []
    for ex in excludes:
        exclude_args.extend(['--exclude-module', ex])

    cmd = [
        sys.executable, "-m", "PyInstaller",
        "--name=Chip8",
        "--onefile",
        "--windowed",
        "--add-data", f"chip8{os.pathsep}chip8",
        "--hidden-import=numpy",
        "--hidden-import=pygame",
        "--hidden-import=numba",
        "--collect-submodules", "pygame",
        "--collect-submodules", "numba.core",
        "--collect-submodules", "llvmlite",
        "--strip",
        "--noupx",
        *exclude_args,
        "main.py"
    ]

    print("\nRunning PyInstaller...")
    print()

    result = subprocess.run(cmd)

    if result.returncode == 0:
        exe_name = "Chip8.exe" if sys.platform == "win32" else "Chip8"
        exe_path = os.path.join("dist", exe_name)
        if os.path.exists(exe_path):
            size_mb = os.path.getsize(exe_path) / (1024 * 1024)
            print()
            print("=" * 50)
            print("BUILD SUCCESSFUL!")
            print(f"  Executable: {os.path.abspath(exe_path)}")
            print(f"  Size: {size_mb:.1f} MB")
            print("=" * 50)
        else:
            print("Build completed but executable not found.")
    else:
        print()
        print("=" * 50)
        print("BUILD FAILED!")
        print("=" * 50)
        sys.exit(1)

if __name__ == "__main__":
    main()
