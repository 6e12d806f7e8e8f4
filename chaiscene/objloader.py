"""Loaders for Wavefront OBJ meshes and MTL material libraries."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from chaiscene.components import PhongMaterial

logger = logging.getLogger(__name__)

Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class Vertex:
    """A mesh vertex: position, normal and texture coordinate."""

    position: Vec3 = (0.0, 0.0, 0.0)
    normal: Vec3 = (0.0, 0.0, 0.0)
    tex_coord: tuple[float, float] = (0.0, 0.0)


@dataclass
class Mesh:
    """Indexed triangle mesh."""

    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)


@dataclass
class MeshAsset:
    """A loaded mesh and the names of the materials it came with."""

    mesh: Mesh
    material_libraries: list[str] = field(default_factory=list)

    def add_material_library(self, name: str) -> None:
        self.material_libraries.append(name)


@dataclass
class _MtlMaterial:
    name: str
    ambient: Vec3 = (0.0, 0.0, 0.0)
    diffuse: Vec3 = (0.0, 0.0, 0.0)
    specular: Vec3 = (0.0, 0.0, 0.0)
    shininess: float = 1.0
    dissolve: float = 1.0


def _lines(text: str) -> Iterator[tuple[int, str, list[str]]]:
    """Yield (line number, keyword, arguments) for every non-empty line."""
    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if line:
            keyword, *args = line.split()
            yield line_no, keyword, args


def _floats(args: list[str], count: int, line_no: int, keyword: str) -> list[float]:
    if len(args) < count:
        raise ValueError(f"line {line_no}: '{keyword}' needs {count} values")
    try:
        return [float(a) for a in args[:count]]
    except ValueError as exc:
        raise ValueError(f"line {line_no}: bad number in '{keyword}'") from exc


def _parse_mtl(text: str) -> list[_MtlMaterial]:
    materials: list[_MtlMaterial] = []
    current: _MtlMaterial | None = None
    dissolve_seen = False
    for line_no, keyword, args in _lines(text):
        if keyword == "newmtl":
            current = _MtlMaterial(name=" ".join(args))
            materials.append(current)
            dissolve_seen = False
            continue
        if current is None:
            continue
        if keyword == "Ka":
            current.ambient = tuple(_floats(args, 3, line_no, keyword))
        elif keyword == "Kd":
            current.diffuse = tuple(_floats(args, 3, line_no, keyword))
        elif keyword == "Ks":
            current.specular = tuple(_floats(args, 3, line_no, keyword))
        elif keyword == "Ns":
            current.shininess = _floats(args, 1, line_no, keyword)[0]
        elif keyword == "d":
            current.dissolve = _floats(args, 1, line_no, keyword)[0]
            dissolve_seen = True
        elif keyword == "Tr" and not dissolve_seen:
            current.dissolve = 1.0 - _floats(args, 1, line_no, keyword)[0]
    return materials


def _resolve_index(text: str, count: int, line_no: int) -> int:
    if not text:
        return -1
    try:
        value = int(text)
    except ValueError as exc:
        raise ValueError(f"line {line_no}: bad face index {text!r}") from exc
    if value == 0:
        raise ValueError(f"line {line_no}: face index 0 is invalid")
    return value - 1 if value > 0 else count + value


class ObjLoader:
    """Loads .obj files into a deduplicated, triangulated MeshAsset."""

    def can_load(self, ext: str) -> bool:
        return ext == "obj"

    def load(self, path: str | Path) -> MeshAsset:
        path = Path(path)
        text = path.read_text()
        positions: list[Vec3] = []
        normals: list[Vec3] = []
        texcoords: list[tuple[float, float]] = []
        corners: list[tuple[int, int, int, int]] = []
        libraries: list[str] = []

        for line_no, keyword, args in _lines(text):
            if keyword == "v":
                positions.append(tuple(_floats(args, 3, line_no, keyword)))
            elif keyword == "vn":
                normals.append(tuple(_floats(args, 3, line_no, keyword)))
            elif keyword == "vt":
                values = _floats(args, 1, line_no, keyword)
                v = _floats(args, 2, line_no, keyword)[1] if len(args) > 1 else 0.0
                texcoords.append((values[0], v))
            elif keyword == "f":
                if len(args) < 3:
                    raise ValueError(f"line {line_no}: a face needs at least 3 vertices")
                face = []
                for token in args:
                    parts = token.split("/")
                    if len(parts) > 3 or not parts[0]:
                        raise ValueError(f"line {line_no}: bad face vertex {token!r}")
                    parts += [""] * (3 - len(parts))
                    face.append((
                        _resolve_index(parts[0], len(positions), line_no),
                        _resolve_index(parts[1], len(texcoords), line_no),
                        _resolve_index(parts[2], len(normals), line_no),
                    ))
                for second, third in zip(face[1:], face[2:]):
                    for corner in (face[0], second, third):
                        corners.append((line_no, *corner))
            elif keyword == "mtllib":
                libraries.extend(args)

        mesh = Mesh()
        unique: dict[str, int] = {}
        for line_no, vi, ti, ni in corners:
            if not 0 <= vi < len(positions):
                raise ValueError(f"line {line_no}: vertex index out of range")
            if ti >= len(texcoords) or (ti < -1):
                raise ValueError(f"line {line_no}: texture coordinate index out of range")
            if ni >= len(normals) or (ni < -1):
                raise ValueError(f"line {line_no}: normal index out of range")
            normal = normals[ni] if ni >= 0 else (0.0, 0.0, 0.0)
            if ti >= 0:
                u, v = texcoords[ti]
                tex_coord = (u, 1.0 - v)
            else:
                tex_coord = (0.0, 0.0)
            vertex = Vertex(positions[vi], normal, tex_coord)
            key = ",".join(repr(x) for x in (*vertex.position, *vertex.normal, *vertex.tex_coord))
            index = unique.get(key)
            if index is None:
                index = len(mesh.vertices)
                unique[key] = index
                mesh.vertices.append(vertex)
            mesh.indices.append(index)

        asset = MeshAsset(mesh)
        for library in libraries:
            library_path = path.parent / library
            try:
                materials = _parse_mtl(library_path.read_text())
            except OSError:
                logger.warning("material file %s not found", library_path)
                continue
            for material in materials:
                asset.add_material_library(material.name)
        return asset


class MtlLoader:
    """Loads the first material of an .mtl file as a PhongMaterial."""

    def can_load(self, ext: str) -> bool:
        return ext == "mtl"

    def load(self, path: str | Path) -> PhongMaterial:
        path = Path(path)
        materials = _parse_mtl(path.read_text())
        if not materials:
            raise ValueError(f"could not load material: {path}")
        for material in materials:
            logger.info("loaded material: %s", material.name)

        source = materials[0]
        result = PhongMaterial()
        if any(c != 0.0 for c in source.specular):
            result.specular = source.specular
        if any(c != 0.0 for c in source.diffuse):
            result.diffuse = source.diffuse
        if any(c != 0.0 for c in source.ambient):
            result.ambient = source.ambient
        if source.shininess > 0.0:
            result.shininess = source.shininess
        if source.dissolve < 1.0:
            result.transparency = source.dissolve
        return result