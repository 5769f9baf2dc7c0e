#!/usr/bin/env python
"""
Script para ejecutar el dashboard de GeStock con PYTHONPATH configurado
"""
import subprocess
import sys
import os

if __name__ == "__main__":
    # 'src' se importa como paquete desde la raíz del proyecto
    env = os.environ.copy()
    project_root = os.path.dirname(os.path.abspath(__file__))
    env["PYTHONPATH"] = project_root

    cmd = [
        sys.executable,
        "-m",
        "streamlit",
        "run",
        "src/ui/dashboard.py",
        "--client.showErrorDetails=true",
    ]

    print(f"[*] Ejecutando: {' '.join(cmd)}")
    print(f"[*] Productos: {env.get('GESTOCK_PRODUCTS_CSV', 'public/products.csv')}")

    subprocess.run(cmd, cwd=project_root, env=env)
