import pytest

from chaiscene.components import PhongMaterial
from chaiscene.objloader import Mesh, MeshAsset, MtlLoader, ObjLoader, Vertex

TRIANGLE = """\
# a single triangle
v 0 0 0
v 1 0 0
v 0 1 0
vt 0 0
vt 1 0
vt 0 0.25
vn 0 0 1
f 1/1/1 2/2/1 3/3/1
"""

QUAD = """\
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
f 1 2 3 4
"""


def _write(tmp_path, name, text):
    target = tmp_path / name
    target.write_text(text)
    return target


def test_can_load_extensions():
    assert ObjLoader().can_load("obj")
    assert not ObjLoader().can_load(".obj")
    assert MtlLoader().can_load("mtl")
    assert not MtlLoader().can_load("obj")


def test_triangle_positions_normals_and_flipped_texcoords(tmp_path):
    asset = ObjLoader().load(_write(tmp_path, "tri.obj", TRIANGLE))
    mesh = asset.mesh
    assert mesh.indices == [0, 1, 2]
    assert [v.position for v in mesh.vertices] == [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
    assert all(v.normal == (0.0, 0.0, 1.0) for v in mesh.vertices)
    assert mesh.vertices[0].tex_coord == (0.0, 1.0)
    assert mesh.vertices[2].tex_coord == (0.0, 0.75)


def test_quad_is_triangulated_and_deduplicated(tmp_path):
    mesh = ObjLoader().load(_write(tmp_path, "quad.obj", QUAD)).mesh
    assert len(mesh.indices) == 6
    assert len(mesh.vertices) == 4
    assert set(mesh.indices) == {0, 1, 2, 3}
    assert mesh.indices[:3] == [0, 1, 2]


def test_missing_attributes_default_to_zero(tmp_path):
    mesh = ObjLoader().load(_write(tmp_path, "quad.obj", QUAD)).mesh
    assert all(v.normal == Vertex().normal for v in mesh.vertices)
    assert all(v.tex_coord == Vertex().tex_coord for v in mesh.vertices)


def test_negative_indices_match_positive(tmp_path):
    positive = ObjLoader().load(_write(tmp_path, "a.obj", "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n"))
    negative = ObjLoader().load(_write(tmp_path, "b.obj", "v 0 0 0\nv 1 0 0\nv 0 1 0\nf -3 -2 -1\n"))
    assert negative.mesh == positive.mesh


def test_shared_vertices_across_faces_are_reused(tmp_path):
    text = "v 0 0 0\nv 1 0 0\nv 0 1 0\nv 1 1 0\nf 1 2 3\nf 3 2 4\n"
    mesh = ObjLoader().load(_write(tmp_path, "two.obj", text)).mesh
    assert len(mesh.vertices) == 4
    assert mesh.indices[3:5] == [mesh.indices[2], mesh.indices[1]]


def test_material_names_from_mtllib(tmp_path):
    _write(tmp_path, "mats.mtl", "newmtl red\nKd 1 0 0\nnewmtl blue\nKd 0 0 1\n")
    asset = ObjLoader().load(_write(tmp_path, "m.obj", "mtllib mats.mtl\n" + QUAD))
    assert asset.material_libraries == ["red", "blue"]


def test_missing_mtllib_is_tolerated(tmp_path):
    asset = ObjLoader().load(_write(tmp_path, "m.obj", "mtllib absent.mtl\n" + QUAD))
    assert asset.material_libraries == []
    assert len(asset.mesh.vertices) == 4


def test_missing_obj_file_raises(tmp_path):
    with pytest.raises(OSError):
        ObjLoader().load(tmp_path / "nothing.obj")


@pytest.mark.parametrize(
    "text",
    [
        "v 0 0 0\nv 1 0 0\nf 1 2 3\n",
        "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 0 1 2\n",
        "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2\n",
        "v 0 zero 0\n",
        "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1//4 2 3\n",
    ],
)
def test_malformed_obj_raises(tmp_path, text):
    with pytest.raises(ValueError):
        ObjLoader().load(_write(tmp_path, "bad.obj", text))


def test_mesh_asset_add_material_library():
    asset = MeshAsset(Mesh())
    asset.add_material_library("steel")
    asset.add_material_library("glass")
    assert asset.material_libraries == ["steel", "glass"]


def test_mtl_loader_sets_nonzero_colours(tmp_path):
    text = "newmtl shiny\nKa 0.1 0.2 0.3\nKd 0.5 0.5 0.5\nKs 0 0 0\nNs 32\nd 0.5\n"
    material = MtlLoader().load(_write(tmp_path, "shiny.mtl", text))
    assert isinstance(material, PhongMaterial)
    assert material.ambient == (0.1, 0.2, 0.3)
    assert material.diffuse == (0.5, 0.5, 0.5)
    assert material.specular is None
    assert material.shininess == 32.0
    assert material.transparency == 0.5


def test_mtl_loader_leaves_defaults_unset(tmp_path):
    text = "newmtl plain\nNs 0\nd 1\n"
    material = MtlLoader().load(_write(tmp_path, "plain.mtl", text))
    assert material == PhongMaterial()


def test_mtl_loader_uses_first_material(tmp_path):
    text = "newmtl first\nKd 1 0 0\nnewmtl second\nKd 0 1 0\n"
    material = MtlLoader().load(_write(tmp_path, "two.mtl", text))
    assert material.diffuse == (1.0, 0.0, 0.0)


def test_mtl_transparency_from_tr(tmp_path):
    material = MtlLoader().load(_write(tmp_path, "tr.mtl", "newmtl glass\nTr 0.25\n"))
    assert material.transparency == pytest.approx(0.75)


def test_mtl_loader_without_materials_raises(tmp_path):
    with pytest.raises(ValueError):
        MtlLoader().load(_write(tmp_path, "empty.mtl", "# nothing here\n"))