import json
import os
import shutil
import zipfile
from typing import Any, Optional

import pandas as pd
import requests
from lxml import etree

from qualtrics_export import config
from qualtrics_export.errors import ExtractionError, UnsupportedFormatError
from qualtrics_export.formats import ExportFormat


def same_dir(a: str, b: str) -> bool:
    return os.path.normcase(os.path.realpath(a)) == os.path.normcase(os.path.realpath(b))


def xml_to_dict(element) -> Any:
    children = [c for c in element if isinstance(c.tag, str)]
    text = (element.text or "").strip()

    if not children and not element.attrib:
        return text or None

    node = {}
    if element.attrib:
        node["@attributes"] = dict(element.attrib)

    for child in children:
        tag = etree.QName(child).localname
        value = xml_to_dict(child)
        if tag not in node:
            node[tag] = value
        elif isinstance(node[tag], list):
            node[tag].append(value)
        else:
            node[tag] = [node[tag], value]

    if text:
        node["#text"] = text
    return node


class ArchiveHandler:
    def __init__(self, client, logger, default_save_dir: Optional[str] = None):
        self.client = client
        self.logger = logger
        self._default_save_dir = default_save_dir

    @property
    def default_save_dir(self) -> str:
        if self._default_save_dir is None:
            self._default_save_dir = config.default_save_dir()
        return self._default_save_dir

    @default_save_dir.setter
    def default_save_dir(self, path: str):
        self._default_save_dir = path

    def download(self, job_id: str) -> bytes:
        try:
            return self.client.download_file(job_id)
        except requests.RequestException:
            # Eenmalig direct opnieuw proberen
            self.logger.warning(f"Download {job_id} mislukt, nog één poging")
            return self.client.download_file(job_id)

    def save(self, zip_bytes: bytes, save_dir: str, job_id: str) -> str:
        zip_path = os.path.join(save_dir, f"{job_id}.zip")
        with open(zip_path, "wb") as f:
            f.write(zip_bytes)
        self.logger.info(f"Export opgeslagen: {zip_path} ({len(zip_bytes)} bytes)")
        return zip_path

    def extract(self, zip_path: str, save_dir: str, export_format: ExportFormat,
                job_id: Optional[str] = None) -> str:
        try:
            with zipfile.ZipFile(zip_path) as z:
                members = [m for m in z.namelist() if not m.endswith("/")]
                if not members:
                    raise ValueError("Empty zip archive")

                member = members[0]
                self.logger.info(f"{export_format.value.upper()} gevonden: {member}")

                if job_id is None or not same_dir(save_dir, self.default_save_dir):
                    return z.extract(member, save_dir)

                # Tijdelijke map: plat uitpakken onder een naam per job
                target = os.path.join(save_dir, f"{job_id}_{os.path.basename(member)}")
                with z.open(member) as src, open(target, "wb") as dst:
                    shutil.copyfileobj(src, dst)
                return target
        except (zipfile.BadZipFile, ValueError, OSError) as e:
            raise ExtractionError(
                f"Error extracting {export_format.value} from zip file."
            ) from e

    def parse(self, path: str, export_format: ExportFormat, skip_metadata_rows: int = 1) -> Any:
        if export_format is ExportFormat.CSV:
            # Rij direct onder de header is metadata (ImportId per kolom), geen response.
            # Overslaan voor het inlezen, anders worden alle kolommen tekst.
            df = pd.read_csv(path, skiprows=range(1, 1 + skip_metadata_rows))
            self.logger.info(f"CSV geladen: {df.shape[0]} rijen x {df.shape[1]} kolommen")
            return df

        if export_format is ExportFormat.JSON:
            with open(path, encoding="utf-8") as f:
                return json.load(f)

        if export_format is ExportFormat.XML:
            parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
            return xml_to_dict(etree.parse(path, parser).getroot())

        raise UnsupportedFormatError("SPSS files are currently not supported.")

    def cleanup(self, zip_path: str, member_path: Optional[str], save_dir: str):
        if os.path.exists(zip_path):
            os.remove(zip_path)

        # Eigen map opgegeven = gebruiker wil het uitgepakte bestand houden
        if not member_path or not same_dir(save_dir, self.default_save_dir):
            return

        root = os.path.realpath(save_dir)
        parent = os.path.dirname(os.path.realpath(member_path))

        if os.path.exists(member_path):
            os.remove(member_path)

        # Lege submappen uit de ZIP opruimen, tot aan save_dir
        while parent.startswith(root + os.sep) and not os.listdir(parent):
            os.rmdir(parent)
            parent = os.path.dirname(parent)
