"""Procedural construction routines embedded verbatim in every generated script.

The routines read nothing but the ``CONFIG`` dict emitted ahead of them,
so this text is constant.  Thresholds here must stay in step with
:mod:`towerstudio.compiler.layout` and :mod:`towerstudio.config`.
"""

BUILD_LIBRARY = """\
# -------- Utility Helpers --------
def clear_scene():
    bpy.ops.object.select_all(action='SELECT')
    bpy.ops.object.delete()
    for collection in (bpy.data.meshes, bpy.data.lights, bpy.data.cameras):
        for block in list(collection):
            collection.remove(block, do_unlink=True)


def create_material(name, color_tuple):
    mat = bpy.data.materials.get(name)
    if mat is None:
        mat = bpy.data.materials.new(name=name)
        mat.use_nodes = True
    nodes = mat.node_tree.nodes
    principled = nodes.get("Principled BSDF")
    principled.inputs[0].default_value = color_tuple
    principled.inputs[7].default_value = 0.05
    return mat


# -------- Core Systems --------
def create_site_grid(cfg):
    width = cfg["dimensions"]["width"]
    depth = cfg["dimensions"]["depth"]
    bpy.ops.mesh.primitive_grid_add(x_subdivisions=12, y_subdivisions=12, size=max(width, depth) * 0.75)
    plane = bpy.context.active_object
    plane.name = f"{cfg['project_name']}::SiteGrid"
    plane.location = (0, 0, 0)
    plane_mat = create_material("GroundPlane", (0.12, 0.12, 0.12, 1.0))
    plane.data.materials.append(plane_mat)


def create_core(cfg, materials):
    dims = cfg["dimensions"]
    height = dims["floor_height"] * cfg["floors"] + dims["base_height"] * 2
    bpy.ops.mesh.primitive_cube_add(size=1)
    core = bpy.context.active_object
    core.name = "VerticalCore"
    core.scale = (dims["core_width"] / 2, dims["core_depth"] / 2, height / 2)
    core.location = (0, 0, height / 2)
    core.data.materials.append(materials["accent"])
    bpy.ops.object.modifier_add(type='BEVEL')
    core.modifiers['Bevel'].width = 0.2
    core.modifiers['Bevel'].segments = 2
    return core


def create_floor_plate(cfg, level, materials):
    dims = cfg["dimensions"]
    z = dims["base_height"] + dims["floor_height"] * level + dims["floor_height"] / 2
    height = dims["floor_height"]
    if level == 0:
        height = cfg["dimensions"]["lobby_height"]
        z = dims["base_height"] + height / 2
    bpy.ops.mesh.primitive_cube_add(size=1)
    block = bpy.context.active_object
    block.name = f"Floor_{level + 1:02d}"
    block.scale = (dims["width"] / 2, dims["depth"] / 2, height / 2)
    block.location = (0, 0, z)
    block.data.materials.append(materials["base"])
    return block


def create_balcony(cfg, level, col_index, total_cols, materials):
    facade = cfg["facade"]
    dims = cfg["dimensions"]
    if facade["balcony_depth"] <= 0.05:
        return
    spacing = dims["width"] / max(1, total_cols)
    x = -dims["width"] / 2 + spacing * (col_index + 0.5)
    z_base = dims["base_height"] + dims["floor_height"] * level + dims["floor_height"] * 0.6
    bpy.ops.mesh.primitive_cube_add(size=1)
    balcony = bpy.context.active_object
    balcony.name = f"Balcony_{level + 1:02d}_{col_index:02d}"
    balcony.scale = (facade["window_width"] / 2, facade["balcony_depth"] / 2, dims["floor_height"] * 0.18)
    balcony.location = (x, dims["depth"] / 2 + facade["balcony_depth"] / 2, z_base)
    balcony.data.materials.append(materials["balcony"])
    bpy.ops.object.modifier_add(type='BEVEL')
    balcony.modifiers['Bevel'].width = 0.08
    balcony.modifiers['Bevel'].segments = 2


def add_windows(cfg, level, side, materials):
    dims = cfg["dimensions"]
    facade = cfg["facade"]
    module = max(1.0, facade["module"])
    window_w = facade["window_width"]
    window_h = facade["window_height"]
    is_front_back = side in ("front", "back")
    width = dims["width"] if is_front_back else dims["depth"]
    depth = dims["depth"] if is_front_back else dims["width"]
    repetitions = max(1, int(width // module))
    forward = depth / 2 + 0.02
    forward = forward if side in ("front", "right") else -forward
    parent = bpy.data.objects.get(f"Floor_{level + 1:02d}")
    for idx in range(repetitions):
        bpy.ops.mesh.primitive_cube_add(size=1)
        win = bpy.context.active_object
        win.name = f"Window_{side}_{level + 1:02d}_{idx:03d}"
        spread = width / repetitions
        position = -width / 2 + spread * (idx + 0.5)
        if is_front_back:
            win.location = (position, forward, dims["base_height"] + dims["floor_height"] * level + window_h / 2 + facade["spandrel_height"])
            win.scale = (window_w / 2, 0.05, window_h / 2)
        else:
            win.location = (forward, position, dims["base_height"] + dims["floor_height"] * level + window_h / 2 + facade["spandrel_height"])
            win.scale = (0.05, window_w / 2, window_h / 2)
        win.data.materials.append(materials["glazing"])
        if parent:
            win.parent = parent


def create_podium(cfg, materials):
    dims = cfg["dimensions"]
    setback = cfg["dimensions"]["podium_setback"]
    for level in range(cfg["dimensions"]["podium_levels"]):
        bpy.ops.mesh.primitive_cube_add(size=1)
        pod = bpy.context.active_object
        pod.name = f"Podium_{level + 1}"
        shrink = setback * level
        height = dims["floor_height"]
        pod.scale = ((dims["width"] + setback * 2 - shrink) / 2, (dims["depth"] + setback * 2 - shrink) / 2, height / 2)
        pod.location = (0, 0, dims["base_height"] + height / 2 + level * height)
        pod.data.materials.append(materials["accent"])


def apply_roof(cfg, materials):
    dims = cfg["dimensions"]
    top_level = cfg["floors"]
    z = dims["base_height"] + dims["floor_height"] * top_level + dims["floor_height"] * 0.5
    bpy.ops.mesh.primitive_cube_add(size=1)
    roof = bpy.context.active_object
    roof.name = "Roof"
    roof.scale = (dims["width"] / 2, dims["depth"] / 2, 0.4)
    roof.location = (0, 0, z)
    roof.data.materials.append(materials["roof"])
    if cfg["roof_style"] == "pitched":
        bpy.ops.object.modifier_add(type='SIMPLE_DEFORM')
        roof.modifiers['SimpleDeform'].deform_method = 'BEND'
        roof.modifiers['SimpleDeform'].angle = math.radians(12)
    elif cfg["roof_style"] == "sawtooth":
        bpy.ops.object.modifier_add(type='ARRAY')
        roof.modifiers['Array'].count = 4
        roof.modifiers['Array'].relative_offset_displace[0] = 0.3

    if cfg["include_solar_panels"]:
        panel_count = 10
        for idx in range(panel_count):
            bpy.ops.mesh.primitive_cube_add(size=1)
            panel = bpy.context.active_object
            panel.name = f"Solar_{idx:02d}"
            panel.scale = (1.2, 2.4, 0.05)
            panel.location = (
                -dims["width"] / 2 + 2 + (idx % 5) * 3,
                -dims["depth"] / 2 + 2 + (idx // 5) * 3,
                z + 0.35,
            )
            panel.data.materials.append(materials["accent"])
            panel.rotation_euler[0] = math.radians(12)

    if cfg["add_rooftop_garden"]:
        bpy.ops.mesh.primitive_plane_add(size=min(dims["width"], dims["depth"]) * 0.65, location=(0, 0, z + 0.2))
        garden = bpy.context.active_object
        garden.name = "RooftopGarden"
        garden_mat = create_material("RooftopGarden", (0.18, 0.32, 0.18, 1))
        garden.data.materials.append(garden_mat)


def carve_atrium(cfg):
    if not cfg["has_atrium"]:
        return
    dims = cfg["dimensions"]
    bpy.ops.mesh.primitive_cube_add(size=1)
    atrium = bpy.context.active_object
    atrium.name = "AtriumCut"
    atrium.scale = (dims["width"] * 0.25, dims["depth"] * 0.25, dims["floor_height"] * cfg["floors"] / 2)
    atrium.location = (0, 0, dims["base_height"] + dims["floor_height"] * cfg["floors"] / 2)
    for obj in bpy.data.objects:
        if obj.name.startswith("Floor_"):
            bool_mod = obj.modifiers.new(name="AtriumBoolean", type='BOOLEAN')
            bool_mod.operation = 'DIFFERENCE'
            bool_mod.object = atrium
    atrium.hide_viewport = True
    atrium.hide_render = True


def tag_metadata(cfg):
    if "building_metadata" not in bpy.context.scene:
        bpy.context.scene["building_metadata"] = {}
    bpy.context.scene["building_metadata"][cfg["project_name"]] = cfg


def material_library(cfg):
    base = create_material("Facade_Base", cfg["colors"]["base"])
    accent = create_material("Facade_Accent", cfg["colors"]["accent"])
    glazing = create_material("Facade_Glass", cfg["colors"]["glazing"])
    balcony = create_material("Balcony_Frame", cfg["colors"]["balcony"])
    roof = create_material("Roof_Finish", cfg["colors"]["roof"])
    return {"base": base, "accent": accent, "glazing": glazing, "balcony": balcony, "roof": roof}


def build(cfg):
    clear_scene()
    create_site_grid(cfg)
    materials = material_library(cfg)
    create_core(cfg, materials)
    if cfg["include_podium"]:
        create_podium(cfg, materials)
    for level in range(cfg["floors"]):
        floor = create_floor_plate(cfg, level, materials)
        add_windows(cfg, level, "front", materials)
        add_windows(cfg, level, "back", materials)
        add_windows(cfg, level, "left", materials)
        add_windows(cfg, level, "right", materials)
        if cfg["facade"]["balcony_frequency"] != "none" and level > 0 and cfg["facade"]["balcony_depth"] > 0.05:
            module_count = max(3, int(cfg["dimensions"]["width"] // cfg["facade"]["module"]))
            if cfg["facade"]["balcony_frequency"] == "every" or (cfg["facade"]["balcony_frequency"] == "alternate" and level % 2 == 0):
                for col in range(module_count):
                    create_balcony(cfg, level, col, module_count, materials)
            elif cfg["facade"]["balcony_frequency"] == "corners":
                corner_cols = max(2, module_count)
                for col in (0, corner_cols - 1):
                    create_balcony(cfg, level, col, corner_cols, materials)
        if cfg["facade"]["include_light_shelves"] and level <= 6:
            bpy.ops.mesh.primitive_cube_add(size=1)
            shelf = bpy.context.active_object
            shelf.name = f"LightShelf_{level + 1:02d}"
            shelf.scale = (cfg["dimensions"]["width"] / 2, 0.25, 0.05)
            shelf.location = (0, cfg["dimensions"]["depth"] / 2 + 0.3, floor.location[2] + cfg["facade"]["window_height"] / 2)
            shelf.data.materials.append(materials["accent"])
    carve_atrium(cfg)
    apply_roof(cfg, materials)
    tag_metadata(cfg)
    bpy.context.view_layer.update()


if __name__ == "__main__":
    build(CONFIG)
"""
