"""Tests for the CloudFormation generator."""

from __future__ import annotations

from archviz.generator import DiagramKind, generate
from archviz.parser import parse

TEMPLATE = """\
AWSTemplateFormatVersion: '2010-09-09'
Parameters:
  InstanceType:
    Type: String
    Default: t3.micro
  Env:
    Type: String
Resources:
  VPC:
    Type: AWS::EC2::VPC
  Subnet:
    Type: AWS::EC2::Subnet
    DependsOn: VPC
    Properties:
      VpcId: !Ref VPC
  Server:
    Type: AWS::EC2::Instance
    DependsOn: [VPC, Subnet]
    Properties:
      InstanceType: !Ref InstanceType
  Table:
    Type: AWS::DynamoDB::Table
  Broken: not-a-mapping
"""


class TestCloudFormationGenerator:
    def test_graph_kind(self) -> None:
        result = generate(parse(TEMPLATE))
        assert result.success
        assert result.diagram_kind == DiagramKind.graph
        assert result.markup.startswith("graph TD\n")

    def test_resource_nodes(self) -> None:
        markup = generate(parse(TEMPLATE)).markup
        assert 'VPC["AWS::EC2::VPC<br/>☁️ VPC"]' in markup
        assert 'Server["AWS::EC2::Instance<br/>☁️ Server"]' in markup
        assert "Broken" not in markup

    def test_depends_on_string_and_list(self) -> None:
        markup = generate(parse(TEMPLATE)).markup
        assert "    VPC --> Subnet\n" in markup
        assert "    VPC --> Server\n" in markup
        assert "    Subnet --> Server\n" in markup

    def test_parameters_without_edges(self) -> None:
        markup = generate(parse(TEMPLATE)).markup
        assert 'param_InstanceType["Parameter<br/>⚙️ InstanceType<br/>🔧 String"]' in markup
        assert "param_Env" in markup
        assert "--> param_" not in markup

    def test_classes(self) -> None:
        markup = generate(parse(TEMPLATE)).markup
        assert "class VPC network" in markup
        assert "class Server compute" in markup
        assert "class Table database" in markup
        assert "class param_Env parameter" in markup
