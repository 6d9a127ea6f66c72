"""
Upload an equipment or product workbook to the investment dashboard.

Usage: python upload_investments.py path/to/data.xlsx [api_base]

Reads the bearer token from CAPACITY_API_TOKEN, or logs in with
CAPACITY_EMAIL / CAPACITY_PASSWORD.
"""
import os
import sys

import requests

XLSX = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def get_token(api_base):
    token = os.getenv('CAPACITY_API_TOKEN')
    if token:
        return token
    r = requests.post(f"{api_base}/auth/login/", json={
        'email': os.environ['CAPACITY_EMAIL'],
        'password': os.environ['CAPACITY_PASSWORD'],
    })
    r.raise_for_status()
    return r.json()['token']


def upload(xlsx_path, api_base='http://127.0.0.1:8000/api'):
    url = f"{api_base}/investments/import/"
    headers = {'Authorization': f'Bearer {get_token(api_base)}'}
    with open(xlsx_path, 'rb') as f:
        files = {'file': (os.path.basename(xlsx_path), f, XLSX)}
        r = requests.post(url, files=files, headers=headers)
    print('status', r.status_code)
    try:
        print(r.json())
    except ValueError:
        print(r.text)


if __name__ == '__main__':
    if len(sys.argv) < 2:
        print('Usage: python upload_investments.py path/to/data.xlsx [api_base]')
        sys.exit(1)
    path = sys.argv[1]
    api = sys.argv[2] if len(sys.argv) > 2 else 'http://127.0.0.1:8000/api'
    upload(path, api)
