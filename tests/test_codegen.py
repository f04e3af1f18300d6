"""Tests for rendering the TypeScript module and writing it."""

from zodgen.codegen import generate, render_module
from zodgen.config import create_config
from zodgen.context_builder import build_context
from zodgen.loader import load_spec


class TestRenderModule:
    """Rendered output of the sample spec."""

    @classmethod
    def setup_class(cls):
        cls.spec = load_spec()
        cls.output = render_module(build_context(cls.spec))

    def test_header_and_imports_first(self):
        lines = self.output.splitlines()
        assert lines[0] == "/* This file was auto-generated. Do not edit it directly. */"
        assert lines[1] == 'import { Request as ExpressRequest } from "express";'
        assert lines[2] == 'import { z } from "zod";'

    def test_schema_exports(self):
        assert 'export const SpeciesSchema = z.enum(["cat", "dog"]);' in self.output
        assert "export type Species = z.infer<typeof SpeciesSchema>;" in self.output

    def test_recursive_components_annotated(self):
        assert "export const PetSchema: z.ZodType<Pet, z.ZodTypeDef, unknown> = z.object({" in self.output
        assert "export const OwnerSchema: z.ZodType<Owner, z.ZodTypeDef, unknown> = z.object({" in self.output
        assert "export const ListPetsResponseBodySchema = z.object({" in self.output

    def test_recursive_component_types_declared(self):
        assert "export type Pet = {\n" in self.output
        assert '  "name": string | null;\n' in self.output
        assert '  "owner"?: Owner | undefined;\n' in self.output
        assert '  "tags": Array<string>;\n' in self.output
        assert '  "details"?: {\n    "age"?: number | undefined;\n  } | undefined;\n' in self.output
        assert '  "pets"?: Array<Pet> | undefined;\n' in self.output
        assert "export type Pet = z.infer" not in self.output
        assert "export type ListPetsResponseBody = z.infer<typeof ListPetsResponseBodySchema>;" in self.output

    def test_schema_order(self):
        assert self.output.index("export const PetSchema") < self.output.index("export const PostPetsResponseBodySchema")

    def test_handler_types(self):
        assert (
            "export type getPetsIdHandler = Handler<undefined, GetPetsIdPathParams, {}, GetPetsIdResponseBody>;"
            in self.output
        )
        assert (
            "export type deletePetsIdHandler = Handler<undefined, DeletePetsIdPathParams, {}, undefined>;"
            in self.output
        )

    def test_client_function(self):
        assert "export interface PostPetsArgs {" in self.output
        assert "  body: PostPetsRequestBody;" in self.output
        assert "export const postPets = (args: PostPetsArgs) => {" in self.output
        assert '    baseUrl: args.baseUrl ?? "http://api.example.com/v1",' in self.output
        assert '    path: "/pets/{id}",' in self.output
        assert '    method: "DELETE",' in self.output
        assert "/** Create a new pet */" in self.output

    def test_runtime_helpers_present(self):
        assert "export class HttpError extends Error {" in self.output
        assert "export const httpRequest = async <" in self.output
        assert "export interface Handler<" in self.output

    def test_deterministic(self):
        assert render_module(build_context(self.spec)) == self.output

    def test_trailing_newline(self):
        assert self.output.endswith(";\n")


class TestFormattingOptions:
    def test_four_space_indentation(self, pet_spec):
        config = create_config(indentation=4)
        output = render_module(build_context(pet_spec, config), config)
        assert '    "id": z.number().int(),' in output

    def test_single_quotes(self, pet_spec):
        config = create_config(quote_mark="single")
        output = render_module(build_context(pet_spec, config), config)
        assert "import { z } from 'zod';" in output
        assert "export const SpeciesSchema = z.enum(['cat', 'dog']);" in output

    def test_handlers_only(self, pet_spec):
        output = render_module(build_context(pet_spec, clients=False))
        assert "/* SERVER */" in output
        assert "/* CLIENT */" not in output
        assert "httpRequest" not in output

    def test_no_paths(self):
        output = render_module(build_context({"components": {"schemas": {"A": {"type": "string"}}}}))
        assert "export const ASchema = z.string();" in output
        assert "/* SERVER */" not in output
        assert "express" not in output


class TestGenerate:
    def test_writes_file(self, pet_spec, tmp_path):
        target = tmp_path / "out" / "api.ts"
        path = generate(build_context(pet_spec), output_path=target)
        assert path == target
        assert "export const PetSchema" in target.read_text(encoding="utf-8")

    def test_crlf_written_verbatim(self, pet_spec, tmp_path):
        config = create_config(line_ending="CRLF")
        target = tmp_path / "api.ts"
        generate(build_context(pet_spec, config), config, target)
        data = target.read_bytes()
        assert b"\r\n" in data
        assert b"\n" not in data.replace(b"\r\n", b"")

    def test_overwrites(self, pet_spec, tmp_path):
        target = tmp_path / "api.ts"
        target.write_text("stale", encoding="utf-8")
        generate(build_context(pet_spec), output_path=target)
        assert "stale" not in target.read_text(encoding="utf-8")
